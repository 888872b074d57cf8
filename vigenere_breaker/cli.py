#!/usr/bin/env python3
"""
vigenere-breaker — command-line front end.

    vigenere-breaker encrypt --key LEMON "attack at dawn"
    vigenere-breaker decrypt --key LEMON LXFOPVEFRNHR
    vigenere-breaker analyze --file ciphertext.txt
    vigenere-breaker recover --length 6 --file ciphertext.txt
    vigenere-breaker break --show-columns < ciphertext.txt
"""

import argparse
import json
import logging
import sys

from .engine import VigenereBreaker

LINE = "═" * 70


# ===============================
# Helpers
# ===============================

def read_text(inline, file_path) -> str:
    if inline is not None and file_path is not None:
        raise ValueError("Provide either TEXT or --file, not both.")
    if inline is not None:
        return inline
    if file_path is not None:
        with open(file_path, "r", encoding="utf-8") as f:
            return f.read()
    return sys.stdin.read()


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=' %(message)s')


def print_analysis(analysis) -> None:
    print(LINE)
    print("  Kasiski examination")
    print(LINE)
    if analysis.repeats:
        print(f"  {'Sequence':<10} {'Distance':>8}  Positions")
        for r in analysis.repeats:
            print(f"  {r.sequence:<10} {r.primary_distance:>8}  "
                  f"{', '.join(str(p) for p in r.positions)}")
    else:
        print("  (no repeated sequences)")
    print(f"  GCD estimate: {analysis.estimated_length}")
    print(LINE)
    print("  Key-length candidates")
    print(LINE)
    for c in analysis.candidates:
        print(f"  {c.length:>3}  {c.source:<8} {c.evidence_score:+.4f}")


def print_columns(profile, key) -> None:
    print(LINE)
    print("  Column letter profile")
    print(LINE)
    for i, column in enumerate(profile):
        top = "  ".join(f"{letter}: {freq * 100:.1f}%" for letter, freq in column.items())
        print(f"  Group {i + 1:<3} key={key[i % len(key)]}  {top}")


# ===============================
# CLI
# ===============================

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="vigenere-breaker",
        description="Repeating-key (Vigenère) cipher tools and cryptanalysis",
    )
    p.add_argument("-v", "--verbose", action="count", default=0,
                   help="Log stage progress (-v) or per-candidate detail (-vv)")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_input(sp):
        sp.add_argument("text", nargs="?", help="Input text (default: read stdin)")
        sp.add_argument("--file", help="Read input text from file")

    enc = sub.add_parser("encrypt", help="Encrypt with a known key")
    add_input(enc)
    enc.add_argument("--key", required=True)

    dec = sub.add_parser("decrypt", help="Decrypt with a known key")
    add_input(dec)
    dec.add_argument("--key", required=True)

    ana = sub.add_parser("analyze", help="Estimate key length (Kasiski + IoC)")
    add_input(ana)
    ana.add_argument("--json", action="store_true", help="Print result as JSON")

    rec = sub.add_parser("recover", help="Recover the key for a given length")
    add_input(rec)
    rec.add_argument("--length", type=int, required=True)
    rec.add_argument("--json", action="store_true", help="Print result as JSON")

    brk = sub.add_parser("break", help="Run the full attack")
    add_input(brk)
    brk.add_argument("--json", action="store_true", help="Print result as JSON")
    brk.add_argument("--show-columns", action="store_true",
                     help="Show the per-column letter profile for the recovered key")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        text = read_text(args.text, args.file)
        breaker = VigenereBreaker()

        if args.cmd == "encrypt":
            print(breaker.encrypt(text, args.key))

        elif args.cmd == "decrypt":
            print(breaker.decrypt(text, args.key))

        elif args.cmd == "analyze":
            analysis = breaker.analyze_key_length(text)
            if args.json:
                print(json.dumps(analysis.to_dict(), indent=2))
            else:
                print_analysis(analysis)

        elif args.cmd == "recover":
            candidate = breaker.recover_key(text, args.length)
            if args.json:
                print(json.dumps(candidate.to_dict(), indent=2))
            else:
                print(f"Key:   {candidate.key}")
                print(f"Score: {candidate.fitness_score:.3f}")

        else:  # break
            result = breaker.break_cipher(text)
            if args.json:
                print(json.dumps(result.to_dict(), indent=2))
            else:
                print_analysis(result.analysis)
                if args.show_columns:
                    print_columns(breaker.column_profile(text, result.key_length), result.key)
                print(LINE)
                print(f"  Recovered key: {result.key}")
                print(f"  Score:         {result.fitness_score:.3f}")
                if result.low_confidence:
                    print("  (low confidence: short ciphertext)")
                print(LINE)
                print(result.plaintext)

    except (ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
