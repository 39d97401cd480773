"""
Connector Kernel

Shared foundation for exposing externally hosted records as external objects:
- Field mapping, column and table descriptor types
- Attribute type classification shared by schema building and record mapping
- Typed exceptions with machine-readable codes
- Structured JSON logging
- Contact resolution against the local database
"""

__version__ = "0.1.0"
