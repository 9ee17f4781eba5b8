import logging
from fractions import Fraction

from cooperax.cuts import CutTable, delta_w_sym, show_poly
from cooperax.cuts.admissible_cuts import show_delta
from cooperax.trees.print_rooted_trees import draw_tree
from cooperax.trees.rooted_trees import leaf, tree


def _example_tree():
    # f(g(x, x), x): one symmetric pair of leaves under g
    return tree("f", [tree("g", [leaf("x"), leaf("x")]), leaf("x")])


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    tr = _example_tree()
    print(draw_tree(tr))
    print()

    print("Planar coproduct:")
    for line in show_delta(tr):
        print(f"  {line}")

    for mode in ("symmetric-agg", "symmetric-orbit"):
        poly = delta_w_sym(tr, mode)
        print(f"\n{mode} (total {sum(poly.values(), Fraction(0))}):")
        for line in show_poly(poly):
            print(f"  {line}")

    table = CutTable.build(5)
    level = table.depth - 1
    print(f"\nDegree {table.depth}: {table.basis_size(level)} shapes")
    print("cuts:", table.cut_count_by_degree[level].tolist())
    print("|Aut|:", table.automorphism_count_by_degree[level].tolist())
    print("trunk incidence:")
    print(table.trunk_counts(level))


if __name__ == "__main__":
    main()
