"""
Resolution and evaluation engine for form blueprints.

Components (leaves first): ``paths`` resolves values in a record,
``conditions`` decides conditional logic, ``validation`` checks values
against field rules, ``formatting`` layers style tiers and ``formatters``
renders display strings. Import from the submodules directly.
"""
