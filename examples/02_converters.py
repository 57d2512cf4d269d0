"""
Example 02: Custom Converters and Keyed Maps

This example demonstrates registering a conversion rule, changing the
temporal format, and collecting records into a dict keyed by record.key().
"""

from row_bind import BinderConfig, RowLoader, RowsSource, TemporalFormat
from dataclasses import dataclass
from datetime import datetime


class Money:
    """Amount in cents, stored as '12.34 EUR' text"""

    def __init__(self, cents: int, currency: str):
        self.cents = cents
        self.currency = currency

    def __repr__(self):
        return f"Money({self.cents / 100:.2f} {self.currency})"


def parse_money(target_type, raw):
    if raw is None:
        return None
    amount, currency = raw.split()
    return Money(round(float(amount) * 100), currency)


@dataclass
class Invoice:
    number: str | None = None
    total: Money | None = None
    issued: datetime | None = None

    def key(self):
        return self.number


def main():
    config = BinderConfig(temporal_format=TemporalFormat(pattern="%d.%m.%Y %H:%M", timezone="Europe/Berlin"))
    loader = RowLoader(config)
    loader.register_converter(Money, parse_money)

    source = RowsSource(
        ["number", "total", "issued"],
        [
            ("INV-1", "12.50 EUR", "01.03.2024 10:00"),
            ("INV-2", "99.00 EUR", "02.03.2024 16:30"),
            ("INV-1", "13.00 EUR", "03.03.2024 09:15"),
        ],
    )

    print("=== Converters ===\n")
    invoices = loader.keyed_map(Invoice, {}, source)
    for number, invoice in invoices.items():
        print(f"   {number}: {invoice.total} issued {invoice.issued.isoformat()}")


if __name__ == "__main__":
    main()
