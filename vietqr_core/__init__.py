"""
VietQR Core

Bank account name resolution with tiered fallback and EMV-style
VietQR transfer payload encoding with a CRC16 integrity trailer.
"""

__version__ = "1.0.0"
