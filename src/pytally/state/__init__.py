"""State/store layer.

The reducer is the only code allowed to compute a new tally; the store is
the only component that holds one and tells subscribers it changed.
"""
