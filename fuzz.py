#!/usr/bin/env python3
"""
Random fuzzer for the htmangl merge.
Generates document pairs (with directives) and checks that merging never
fails and that applying an empty document leaves a directive-free base unchanged.
"""

import argparse
import random
import string
import sys
import time
import traceback

from htmangl import apply, parse, render
from htmangl.node import has_directive

TAGS = [
    "div", "span", "p", "a", "img", "ul", "li", "h1", "h2", "header", "footer",
    "main", "nav", "section", "article", "aside", "title", "meta", "link",
    "table", "tr", "td", "template", "pre", "br", "hr",
]

ATTRIBUTES = ["id", "class", "href", "src", "rel", "lang", "data-x", "hidden"]

DIRECTIVES = [
    "<!-- htmangl:insert -->",
    "<!-- htmangl:copy -->",
    "<!--htmangl:insert-->",
    "<!--\thtmangl:copy\n-->",
    # Near misses must be left alone
    "<!-- HTMANGL:insert -->",
    "<!-- htmangl: copy -->",
]


def random_string(min_len=0, max_len=12):
    length = random.randint(min_len, max_len)
    return "".join(random.choice(string.ascii_letters + " &<") for _ in range(length))


def fuzz_attribute():
    name = random.choice(ATTRIBUTES)
    return f' {name}="{random_string(0, 6)}"'


def fuzz_element(depth=0, max_depth=5):
    tag = random.choice(TAGS)
    attrs = "".join(fuzz_attribute() for _ in range(random.randint(0, 2)))
    if depth >= max_depth or random.random() < 0.3:
        return f"<{tag}{attrs}>{random_string()}</{tag}>"
    children = "".join(fuzz_node(depth + 1, max_depth) for _ in range(random.randint(0, 4)))
    return f"<{tag}{attrs}>{children}</{tag}>"


def fuzz_node(depth=0, max_depth=5):
    roll = random.random()
    if roll < 0.15:
        return random.choice(DIRECTIVES)
    if roll < 0.25:
        return f"<!--{random_string()}-->"
    if roll < 0.4:
        return random_string(1)
    return fuzz_element(depth, max_depth)


def generate_document():
    doctype = "<!DOCTYPE html>" if random.random() < 0.5 else ""
    head = "".join(fuzz_node(2, 3) for _ in range(random.randint(0, 3)))
    body = "".join(fuzz_node(2) for _ in range(random.randint(0, 5)))
    if random.random() < 0.1:
        return ""
    return f"{doctype}<html><head>{head}</head><body>{body}</body></html>"


def check_pair(base, applied):
    """Merge the pair; raise AssertionError if an invariant breaks."""
    render(apply(parse(base), parse(applied)))

    # Walked levels drop directive markers, so identity only holds without them.
    if has_directive(parse(base)):
        return
    once = render(apply(parse(base), parse("")))
    assert once == render(parse(base)), "empty apply changed the base"


def run_fuzzer(num_tests, seed=None, verbose=False, save_failures=False):
    if seed is None:
        seed = random.randint(0, 2**31 - 1)
    random.seed(seed)
    print(f"Fuzzing htmangl merge with {num_tests} document pairs (seed={seed})")

    failures = []
    start = time.time()
    for test_num in range(1, num_tests + 1):
        base = generate_document()
        applied = generate_document()
        try:
            check_pair(base, applied)
        except Exception as exc:  # noqa: BLE001
            failures.append(
                {
                    "test_num": test_num,
                    "base": base,
                    "applied": applied,
                    "error": f"{type(exc).__name__}: {exc}",
                    "traceback": traceback.format_exc(),
                }
            )
            if verbose:
                print(f"FAIL #{test_num}: {type(exc).__name__}: {exc}")
        if verbose and test_num % 100 == 0:
            print(f"  {test_num}/{num_tests} done")

    elapsed = time.time() - start
    print(f"\n{num_tests - len(failures)}/{num_tests} passed in {elapsed:.2f}s")

    for failure in failures[:10]:
        print(f"\nTest #{failure['test_num']}: {failure['error']}")
        print(f"  BASE:  {failure['base'][:200]!r}")
        print(f"  APPLY: {failure['applied'][:200]!r}")
    if len(failures) > 10:
        print(f"\n... and {len(failures) - 10} more failures")

    if save_failures and failures:
        filename = f"fuzz_failures_{int(time.time())}.txt"
        with open(filename, "w", encoding="utf-8") as f:
            f.write(f"Seed: {seed}\n\n")
            for failure in failures:
                f.write(f"=== FAILURE #{failure['test_num']} ===\n")
                f.write(f"BASE:\n{failure['base']}\n")
                f.write(f"APPLY:\n{failure['applied']}\n")
                f.write(f"Traceback:\n{failure['traceback']}\n\n")
        print(f"\nFailures saved to {filename}")

    return not failures


def main():
    parser = argparse.ArgumentParser(description="Fuzz the htmangl merge with random document pairs")
    parser.add_argument(
        "--num-tests", "-n",
        type=int,
        default=1000,
        help="Number of document pairs to generate (default: 1000)",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--save-failures",
        action="store_true",
        help="Save failures to a file",
    )
    parser.add_argument(
        "--sample",
        type=int,
        metavar="N",
        help="Just print N sample document pairs (no merging)",
    )

    args = parser.parse_args()

    if args.sample:
        if args.seed is not None:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i + 1} ===")
            print(f"BASE:  {generate_document()}")
            print(f"APPLY: {generate_document()}")
            print()
        return

    success = run_fuzzer(
        args.num_tests,
        seed=args.seed,
        verbose=args.verbose,
        save_failures=args.save_failures,
    )
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
