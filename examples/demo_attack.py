"""
vigenere_breaker — Live Demo: every stage of the attack
=======================================================
Run:  python examples/demo_attack.py

Encrypts a paragraph with a secret key, then walks the ciphertext through
each stage of the attack, printing what every stage found and how long
it took.
"""

import sys, os, time
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

from vigenere_breaker                          import VigenereBreaker, encrypt, normalize
from vigenere_breaker.stages.stage2_kasiski    import KasiskiExaminer
from vigenere_breaker.stages.stage3_ioc        import IoCEstimator
from vigenere_breaker.stages.stage6_scorer     import score_english_text

LINE = "═" * 70
KEY  = "LANTERN"
MSG  = (
    "It was the best of times, it was the worst of times, it was the age of "
    "wisdom, it was the age of foolishness, it was the epoch of belief, it was "
    "the epoch of incredulity, it was the season of light, it was the season of "
    "darkness, it was the spring of hope, it was the winter of despair, we had "
    "everything before us, we had nothing before us, we were all going direct "
    "to heaven, we were all going direct the other way."
)

def header(stage, name):
    print(f"\n{LINE}")
    print(f"  Stage {stage} — {name}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")

logging.basicConfig(level=logging.INFO, format=' %(message)s')

# ─────────────────────────────────────────────────────────────────────────────
print(f"\n{LINE}")
print("  vigenere_breaker — Repeating-key Cryptanalysis Demo")
print(LINE)
ciphertext = encrypt(MSG, KEY)
print(f"  Ciphertext: {ciphertext[:48]}...  ({len(ciphertext)} letters)\n")

# ── STAGE 1–2 ────────────────────────────────────────────────────────────────
header("1–2", "NORMALIZE + KASISKI")
text    = normalize(ciphertext)
t0      = time.perf_counter()
kasiski = KasiskiExaminer()
repeats = kasiski.find_repeats(text)
elapsed = time.perf_counter() - t0
for r in repeats:
    print(f"     {r.sequence:<6} distance={r.primary_distance:<4} at {list(r.positions)}")
ok("GCD estimate", str(kasiski.estimate_length(repeats)))
ok("Elapsed",      f"{elapsed*1000:.2f} ms")

# ── STAGE 3 ──────────────────────────────────────────────────────────────────
header(3, "INDEX OF COINCIDENCE")
for c in IoCEstimator().rank(text)[:5]:
    print(f"     length={c.length:<3} |IoC − 0.067| = {-c.evidence_score:.4f}")

# ── STAGE 4–7 ────────────────────────────────────────────────────────────────
header("4–7", "SELECT → CHI-SQUARED → SCORE → REFINE")
t0      = time.perf_counter()
breaker = VigenereBreaker()
result  = breaker.break_cipher(ciphertext)
elapsed = time.perf_counter() - t0
for c in result.candidates:
    print(f"     length={c.length:<3} key={c.key:<20} score={c.fitness_score:.3f}")
ok("Recovered key", result.key)
ok("Correct",       str(result.key == KEY))
ok("Plaintext",     result.plaintext[:48] + "...")
ok("English score", f"{score_english_text(result.plaintext):.3f}")
ok("Elapsed",       f"{elapsed*1000:.0f} ms")

print(f"\n{LINE}\n")
