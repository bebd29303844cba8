"""Example test script: one passing test, one failing test."""

from assertkit import equals, expect, greater_than, less_than, run


def cart_total(items):
    return sum(price * qty for price, qty in items)


def totals():
    equals(cart_total([(5, 2), (1, 3)]), 13, "mixed cart")
    equals(cart_total([]), 0, "empty cart")
    greater_than(cart_total([(1, 1)]), 0, "non-empty cart")


def receipt():
    receipt = {"lines": [{"sku": "A1", "qty": 2}], "currency": "EUR"}
    expect(receipt).to_equal({"currency": "EUR", "lines": [{"qty": 2, "sku": "A1"}]})
    # Deliberately wrong bound to show a failure diagnostic.
    less_than(len(receipt["lines"]), 1, "single line receipt")


run(totals, "totals")
run(receipt, "receipt")
