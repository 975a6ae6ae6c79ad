"""Root test configuration: sample posts shared by unit and integration tests"""

from pathlib import Path

import pytest


TRAITS_POST = """\
---
title: Trait-Oriented Programming
date: 2021-01-11
summary: Values carry uniquely identified traits.
---

# Traits

A **trait** is a named capability a value can carry.

- `Display` renders a value
- `Eq` compares two values
- `Hash` digests a value

```rust
impl Display for Point { /* **not bold** */ }
```
"""

CONFORMANCE_POST = """\
---
title: Conformance Rules
date: 2021-02-01
---

## Deriving traits

> - a conformance derives one trait from another
> - when a predicate holds on the value

| Trait | Derived from |
| :--- | ---: |
| Text | Display |
"""


@pytest.fixture(name="write_post")
def write_post_fixture(tmp_path):
    """Factory: write a post under tmp_path/posts and return its path."""
    posts = tmp_path / "posts"
    posts.mkdir(exist_ok=True)

    def _write(name: str, text: str) -> Path:
        path = posts / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture(name="blog_dir")
def blog_dir_fixture(write_post):
    """A posts directory with two well-formed posts."""
    write_post("traits.md", TRAITS_POST)
    return write_post("conformance.md", CONFORMANCE_POST).parent
