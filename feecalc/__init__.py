"""
ECSA professional fee calculator.

Bracketed guideline fees, adjustment factors, discounts and stage
allocation, with workbook and PDF exports.
"""
