"""
Procura Kernel

Shared primitives for the procurement calculation core:
- Typed exceptions with machine-readable codes
- Structured JSON logging
- Currency registry (USD / VES)
- Decimal coercion and money rounding
- Caller-side validation helpers
"""

__version__ = "0.1.0"
