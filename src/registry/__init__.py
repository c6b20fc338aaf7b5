"""
Lexicon Registry Module.

Loads the static word -> polarity lexicon used for sentiment scoring.
"""
