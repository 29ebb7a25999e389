"""
DeelRate - crypto/fiat exchange core.

Exchange order lifecycle and cached rate aggregation.
"""
__version__ = "0.1.0"
