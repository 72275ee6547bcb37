"""
Single elimination bracket engine: generation, result entry, advancement and reset.
"""
