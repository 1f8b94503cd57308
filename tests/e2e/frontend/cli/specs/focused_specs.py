"""Only the focused spec runs."""

from janusspec import focused_test, test

test("would fail", lambda t: t.expect(1).to_be(2))
focused_test("focused", lambda t: t.expect(1).to_be(1))
