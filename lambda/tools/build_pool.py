# tools/build_pool.py
"""
Build colmena/data/word_pool.jsonl.gz from the corpus tables.

  build   elements.txt [--lemmas lemmas.txt] [--output PATH]
  explain WORD --elements elements.txt [--forms forms.txt] [--lemmas lemmas.txt]
  omitted FREQ [LIMIT] --elements elements.txt

The tables are the tab-delimited corpus files (crea_elementos.txt,
crea_formas_ortograficas.txt, crea_lemas.txt).
"""
import argparse
from pathlib import Path
from typing import List, Optional

from colmena.admissibility import check
from colmena.corpus import LexiconEntry, load_elements, load_forms, load_lemmas
from colmena.pool import build_pool, omitted_words, save_pool

OUT = Path(__file__).resolve().parents[1] / "colmena" / "data" / "word_pool.jsonl.gz"


def _describe(label: str, entry: LexiconEntry, lemma: Optional[str], category) -> List[str]:
    verdict = check(entry.word, lemma, category, entry.raw_frequency, short_circuit=False)
    lines = [f"{label}: {entry}"]
    lines += [f"\t{rule.value}" for rule in verdict.failures]
    if verdict.common_pangram:
        lines.append("\tcommon pangram")
    if verdict.admissible:
        lines.append("\tvalid")
    return lines


def cmd_build(args) -> int:
    print(f"Parsing {args.elements} ...")
    store = load_elements(args.elements)
    print(f"Found {len(store)} elements")
    lemmas = None
    if args.lemmas:
        lemmas = load_lemmas(args.lemmas)
        print(f"Found {len(lemmas)} lemmas")

    pool = build_pool(store, lemmas)
    print(f"Found {len(pool.words)} words and {len(pool.pangrams)} common pangrams")
    for word in pool.pangrams[:10]:
        print(f"\t{word}")

    save_pool(pool, args.output)
    print(f"Wrote {len(pool.words)} words → {args.output}")
    return 0


def cmd_explain(args) -> int:
    lines: List[str] = []
    if args.elements:
        entry = load_elements(args.elements).get(args.word)
        if entry is not None:
            lines += _describe("Element", entry, entry.lemma, entry.category)
    if args.forms:
        entry = load_forms(args.forms).get(args.word)
        if entry is not None:
            lines += _describe("Form", entry, None, None)
    if args.lemmas:
        entry = load_lemmas(args.lemmas).get(args.word)
        if entry is not None:
            lines += _describe("Lemma", entry, None, entry.category)

    if not lines:
        print("No such element, form, or lemma found")
        return 1
    print("\n".join(lines))
    return 0


def cmd_omitted(args) -> int:
    store = load_elements(args.elements)
    pool = build_pool(store)
    print(f"Exploring {args.limit} omitted words with frequency less than {args.freq}")
    omitted = omitted_words(store, pool, args.freq, args.limit)
    width = max((len(e.word) for e in omitted), default=0)
    for entry in omitted:
        print(f"{entry.word:<{width}} {entry.raw_frequency:>8} {entry.lemma} "
              f"{entry.category.value if entry.category else '-'}")
    return 0


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Curate the corpus into the colmena word pool")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("build", help="Write the compiled word pool")
    p.add_argument("elements", type=Path)
    p.add_argument("--lemmas", type=Path, help="Lemma table used for the lemma fallback")
    p.add_argument("--output", type=Path, default=OUT)
    p.set_defaults(func=cmd_build)

    p = sub.add_parser("explain", help="Show which rules a word breaks")
    p.add_argument("word")
    p.add_argument("--elements", type=Path)
    p.add_argument("--forms", type=Path)
    p.add_argument("--lemmas", type=Path)
    p.set_defaults(func=cmd_explain)

    p = sub.add_parser("omitted", help="Words left out by a minimum frequency")
    p.add_argument("freq", type=int)
    p.add_argument("limit", type=int, nargs="?", default=10)
    p.add_argument("--elements", type=Path, required=True)
    p.set_defaults(func=cmd_omitted)
    return parser


def main(argv=None) -> int:
    args = make_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
