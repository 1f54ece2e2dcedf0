"""
Holding Query Engine.

A read-only query and aggregation facade over an in-memory corporate
ownership hierarchy: holdings, their companies, the companies'
employees and each employee's bank accounts.

Basic usage:
    >>> from holding_query.engine.loader import MockHoldingLoader
    >>> from holding_query.engine.queries import create_query_engine
    >>>
    >>> engine = create_query_engine(MockHoldingLoader())
    >>> engine.get_holding_names_as_string()
    '(Coca-Cola, Nestle, Pepsico)'
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
