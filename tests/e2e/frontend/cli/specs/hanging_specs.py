"""A spec whose async continuation never finishes."""

from janusspec import test

test("never calls done", lambda t: t.async_(lambda done: None))
