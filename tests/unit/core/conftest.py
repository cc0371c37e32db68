"""Shared fixtures for core unit tests"""

import pytest

from mdsite.core.models import Document


CHAPTER_MD = """\
---
layout: chapter
title: Making Our Own Types and Typeclasses
permalink: /making-our-own-types-and-typeclasses/
---

## Algebraic data types intro

We can define our own data type with the **data** keyword:

```haskell
data Bool = False | True
```

- `Circle` takes three fields
- `Rectangle` takes four

Read more in the [Haskell report](https://www.haskell.org/onlinereport/).

![shapes](img/shapes.png)
"""


@pytest.fixture(name="chapter_md")
def chapter_md_fixture():
    return CHAPTER_MD


@pytest.fixture(name="chapter_file")
def chapter_file_fixture(tmp_path):
    f = tmp_path / "making-our-own-types.md"
    f.write_text(CHAPTER_MD, encoding="utf-8")
    return f


@pytest.fixture(name="make_doc")
def make_doc_fixture(tmp_path):
    """Build a Document in memory, with its source under tmp_path."""
    def _make(metadata=None, body="", name="doc.md"):
        return Document(source=tmp_path / name, metadata=metadata or {}, body=body)
    return _make
