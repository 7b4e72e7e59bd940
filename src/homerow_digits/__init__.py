"""homerow-digits — type numeric prefix counts from the home row.

A small key-to-digit translation layer plus the running state needed to
insert the composed number as text.
"""

from homerow_digits.version import __version__

__all__: list[str] = ["__version__"]
