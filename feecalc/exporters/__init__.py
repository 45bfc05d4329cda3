"""
Export renderers. Read a CalculationResult, never recompute it.
"""
