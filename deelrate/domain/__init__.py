"""
Domain Layer - Pure Business Logic

This module contains the exchange domain with zero external dependencies.

Structure:
- entities/: ExchangeOrder aggregate and the ExchangeCompleted record
- value_objects/: Amounts, destination addresses, currency pairs, rates
- result.py: Result and Error types returned by every operation
- exceptions.py: Programming-error exceptions
"""
