#!/usr/bin/env python3
"""Demo: Using divsel as a Python library.

Builds a toy embedding set with three clusters and shows both the
fixed-size and the automatic (saturation) selection.
"""

import numpy as np

from divsel import DiversitySelector, deduplicate


def main():
    rng = np.random.default_rng(7)
    centers = np.eye(3, 16)
    embeddings = np.vstack([
        center + 0.05 * rng.standard_normal((5, 16)) for center in centers
    ])
    labels = [f"cluster-{c}/item-{i}" for c in range(3) for i in range(5)]

    selector = DiversitySelector()

    # 1. Fixed size
    print("--- Fixed k=3 ---")
    for idx in selector.select_fixed_k(embeddings, 3):
        print(f"  {labels[idx]}")

    # 2. Let the objective decide
    print("\n--- Saturation ---")
    result = selector.select_by_saturation(embeddings)
    print(result.summary())

    # 3. Deduplicate items directly
    print("\n--- Dedup ---")
    for kept in deduplicate(labels, embeddings).items:
        print(f"  [{kept.index}] {kept.item}")


if __name__ == "__main__":
    main()
