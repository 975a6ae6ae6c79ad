"""Shared fixtures for core unit tests"""

import pytest

from mdsite.config import Settings
from mdsite.core.styles import load_stylesheet


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text.

## Heading 2

- item one
- item two

```python
print("hello")
```

---

Footer paragraph.
"""


@pytest.fixture(name="settings")
def settings_fixture():
    return Settings()


@pytest.fixture(name="sheet")
def sheet_fixture():
    return load_stylesheet()


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD
