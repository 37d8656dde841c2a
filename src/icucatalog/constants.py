"""Shared constants for icucatalog.

Centralized configuration constants used across the syntax, runtime and
localization packages. Placing them here avoids circular imports.

Constants are grouped by domain:
- Locale defaults: Fallback locale for formatting and plural rules
- Depth limits: Recursion protection for compilation and evaluation
- Cache limits: Memory bounds for caching subsystems
- Placeholders: Conventional tokens inside compiled messages

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale defaults
    "DEFAULT_LOCALE",
    # Depth limits
    "MAX_DEPTH",
    # Cache limits
    "MAX_LOCALE_CACHE_SIZE",
    "COMPILE_CACHE_SIZE",
    # Placeholders
    "OCTOTHORPE",
    "OTHER_CASE",
]

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

# Locale used when neither the active locale nor the locale-list hint is
# recognized by Babel. Applies to the Formatter Bridge and plural rules.
DEFAULT_LOCALE: str = "en"

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting depth for both the compiler (nested plural/select
# sub-messages) and the interpreter (branches and nested compiled values).
# A compiled value that references itself through the value set is caught
# by this limit instead of exhausting the Python stack.
MAX_DEPTH: int = 100

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum cached LocaleContext instances.
MAX_LOCALE_CACHE_SIZE: int = 128

# Maximum memoised results of compile_message() on the development path.
COMPILE_CACHE_SIZE: int = 512

# ============================================================================
# PLACEHOLDERS
# ============================================================================

# Stands for the (offset-adjusted) plural value inside plural branches.
OCTOTHORPE: str = "#"

# Fallback case key shared by plural, selectordinal and select.
OTHER_CASE: str = "other"
