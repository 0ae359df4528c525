"""
Containers for the inputs and working state of an alignment: immutable encoded sequences and dense,
coordinate-addressed grids.
"""
