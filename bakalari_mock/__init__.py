"""Mock server package (Bakaláři API v3 subset).

Serves just enough of the school-information API for mobile clients to log in
and report a version the real deployments would agree with.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
