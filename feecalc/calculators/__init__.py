"""
Fee calculation engine.

Pure arithmetic over the guideline dataset. No I/O, no state between calls.
Bracket lookup -> adjustment factors -> discount -> stage allocation,
aggregated across every fee table.
"""
