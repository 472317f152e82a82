import argparse, logging

from evostat.config import EvoConfig, apply_profile
from evostat.distribution import LinearDistribution
from evostat.evolution import generation_step
from evostat.genes import Gene, Phenotype
from evostat.rng import make_rng
from evostat.statistics import evaluate

log = logging.getLogger("evostat-demo")

def random_population(rng, size, n_genes, lo, hi):
    pop = []
    for _ in range(size):
        genes = tuple(Gene(float(v), lo, hi) for v in rng.uniform(lo, hi, size=n_genes))
        pop.append(Phenotype(genes))
    return pop

def score(pop):
    # toy objective: sum of gene values
    return [pt if pt.evaluated else Phenotype(pt.genotype, sum(g.value for g in pt.genotype)) for pt in pop]

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--pop_size", type=int, default=50)
    ap.add_argument("--n_genes", type=int, default=10)
    ap.add_argument("--generations", type=int, default=5)
    ap.add_argument("--lo", type=float, default=-10.0)
    ap.add_argument("--hi", type=float, default=10.0)
    ap.add_argument("--profile", type=str, default="", help="explore | exploit (opcional)")
    ap.add_argument("--mutation_probability", type=float, default=0.05)
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--workers", type=int, default=1)
    ap.add_argument("--y1", type=float, default=0.1, help="ordenada inicial da LinearDistribution")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    cfg = EvoConfig(mutation_probability=args.mutation_probability,
                    random_seed=args.seed, n_workers=args.workers)
    if args.profile:
        cfg = apply_profile(cfg, args.profile)
    cfg.validate()
    log.info("config: %s", cfg)

    pop = score(random_population(make_rng(cfg.random_seed), args.pop_size, args.n_genes, args.lo, args.hi))
    for gen in range(args.generations):
        _, pop, _ = generation_step(pop, cfg, generation=gen)
        pop = score(pop)
    stat = evaluate(pop, optimize=cfg.optimize)
    print("=== Estatísticas finais ===")
    for k, v in stat.as_dict().items():
        print(f"{k}: {v}")

    dist = LinearDistribution((0.0, float(args.generations + 1)), args.y1)
    print(dist, dist.pdf_text(), dist.cdf_text(), sep="\n")

if __name__ == "__main__":
    main()
