"""Quickstart example for icucatalog.

Demonstrates loading compiled catalogs, switching locales, plural and
select branching, and the Babel-backed formatting helpers.

Note: Examples run with development mode enabled (the default unless Python
is started with -O), so raw ICU strings are compiled on the fly.
"""

from datetime import date
from decimal import Decimal

from icucatalog import ArgumentRef, I18n, Node
from icucatalog.syntax import catalog_from_wire

# Example 1: Compiled messages
print("=" * 50)
print("Example 1: Compiled Messages")
print("=" * 50)

i18n = I18n(
    locale="en",
    messages={
        "en": {
            "greeting": Node(("Hello, ", ArgumentRef("name"), "!")),
            "files": Node(
                (ArgumentRef("count", "plural", {"=0": "No files", "one": "1 file", "other": "# files"}),)
            ),
        }
    },
)

print(i18n.translate("greeting", {"name": "Ana"}))
# Output: Hello, Ana!
for count in (0, 1, 1500):
    print(i18n.translate("files", {"count": count}))
# Output: No files / 1 file / 1,500 files

# Example 2: Wire-format catalogs
print("\n" + "=" * 50)
print("Example 2: Loading Wire-format Catalogs")
print("=" * 50)

i18n.load(
    "fr",
    catalog_from_wire(
        {
            "greeting": ["Bonjour, ", ["name"], " !"],
            "files": [["count", "plural", {"one": ["#", " fichier"], "other": ["#", " fichiers"]}]],
        }
    ),
)
i18n.activate("fr")
print(i18n.t("greeting", {"name": "Ana"}))
# Output: Bonjour, Ana !
print(i18n.t("files", {"count": 1500}))
# Output: 1 500 fichiers (narrow no-break space grouping)

# Example 3: Raw ICU source in development mode
print("\n" + "=" * 50)
print("Example 3: Raw ICU Source")
print("=" * 50)

i18n.load(
    "en",
    {
        "invite": (
            "{host_gender, select, female {{host} invites you} male {{host} invites you} "
            "other {{host} invite you}} to {place}"
        ),
        "rank": "You finished {pos, selectordinal, one {#st} two {#nd} few {#rd} other {#th}}",
        "due": "Due on {when, date, long}",
        "total": "Total: {amount, number, money}",
    },
)
i18n.activate("en")
print(i18n.t("invite", {"host": "Ana", "host_gender": "female", "place": "Lisbon"}))
# Output: Ana invites you to Lisbon
print(i18n.t("rank", {"pos": 22}))
# Output: You finished 22nd
print(i18n.t("due", {"when": date(2024, 3, 5)}))
# Output: Due on March 5, 2024
print(i18n.t("total", {"amount": Decimal("1234.5")}, formats={"money": {"currency": "EUR", "style": "currency"}}))
# Output: Total: €1,234.50

# Example 4: Formatting helpers
print("\n" + "=" * 50)
print("Example 4: Formatting Helpers")
print("=" * 50)

print(i18n.format_number(0.256, {"style": "percent"}))
# Output: 26%
i18n.activate("de", ["de-AT"])
print(i18n.format_number(1234567.891))
# Output: 1 234 567,891
print(i18n.format_date(date(2024, 3, 5), {"year": "numeric", "month": "long", "day": "numeric"}))
# Output: 5. März 2024
