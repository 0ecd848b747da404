"""Shared fixtures for core unit tests"""

import pytest


SAMPLE_MD = """\
# Welcome

Start writing **here**. The preview[^1] updates ==live==.

## Features

- Bold and *italic*
  - nested ~~item~~
1. first
2. second

- [x] Create the editor
- [ ] Write something

| Feature | Status |
|---------|:------:|
| Tables  | done   |

```python
print("<hello>")
```

> [!NOTE]
> This is a helpful note.

> Plain quote

---

[^1]: Footnotes appear at the bottom.
"""

SAMPLE_FM_MD = """\
---
title: Test Doc
slug: test-doc
tags: [a, b]
---

# Title

Body content.
"""


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="sample_file")
def sample_file_fixture(tmp_path):
    f = tmp_path / "sample.md"
    f.write_text(SAMPLE_MD, encoding="utf-8")
    return f


@pytest.fixture(name="frontmatter_file")
def frontmatter_file_fixture(tmp_path):
    f = tmp_path / "with-fm.md"
    f.write_text(SAMPLE_FM_MD, encoding="utf-8")
    return f
