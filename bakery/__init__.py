# bakery/__init__.py
"""
Bakery operations dashboard

Subpackages:
- catalog: products and the Menu page
- orders: order list, item entry and status flags
- production: what to bake per order date
- sales: revenue, baker breakdown and unpaid orders
"""

__version__ = "1.0.0"
