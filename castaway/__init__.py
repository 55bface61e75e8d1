"""
Castaway: island survival simulation core + pygame front-end.
"""
