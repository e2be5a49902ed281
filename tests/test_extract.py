from __future__ import annotations

from mdspec.snippets.extract import extract_fragments
from mdspec.snippets.model import Single

GUIDE = '''
Intro
```scala
//> using scala 3
println("a")
```
# Getting started
Some text
```java
class A {}
```
```bash
ls
```
  ```scala title="x"
  val x = 1
    val y = 2

  ```
## Next Steps!
```scala
unterminated
'''


def test_extracts_scala_and_java_fences_in_order(make_document) -> None:
    fragments = extract_fragments(make_document(GUIDE))
    assert [f.content for f in fragments] == [
        Single('//> using scala 3\nprintln("a")'),
        Single("class A {}"),
        Single("val x = 1\n  val y = 2\n"),
    ]


def test_locations_track_line_section_and_ordinal(make_document) -> None:
    fragments = extract_fragments(make_document(GUIDE))
    assert [(f.location.line_no, f.location.section, f.location.ordinal) for f in fragments] == [
        (2, "", 1),
        (8, "Getting started", 1),
        (14, "Getting started", 2),
    ]


def test_unterminated_fence_is_dropped(make_document) -> None:
    fragments = extract_fragments(make_document(GUIDE))
    assert all("unterminated" not in f.preview() for f in fragments)


def test_derived_names(make_document) -> None:
    fragments = extract_fragments(make_document(GUIDE))
    assert [f.slug for f in fragments] == [
        "guide_1",
        "guide_Getting-started_1",
        "guide_Getting-started_2",
    ]
    assert [f.stable_name for f in fragments] == [
        "guide.md[1]",
        "guide.md#Getting started[1]",
        "guide.md#Getting started[2]",
    ]
    assert [f.hint for f in fragments] == ["guide.md:2", "guide.md:8", "guide.md:14"]


def test_header_inside_code_block_is_code(make_document) -> None:
    document = make_document(
        """
        # A
        ```scala
        # not a header
        ```
        ```scala
        x
        ```
        """
    )
    fragments = extract_fragments(document)
    assert fragments[0].content == Single("# not a header")
    assert [(f.location.section, f.location.ordinal) for f in fragments] == [("A", 1), ("A", 2)]


def test_ordinal_resets_on_new_section(make_document) -> None:
    document = make_document(
        """
        ```scala
        a
        ```
        ```scala
        b
        ```
        #Second
        ```scala
        c
        ```
        """
    )
    fragments = extract_fragments(document)
    assert [f.stable_name for f in fragments] == [
        "guide.md[1]",
        "guide.md[2]",
        "guide.md#Second[1]",
    ]


def test_slug_drops_unsafe_characters(make_document) -> None:
    document = make_document(
        """
        ## Next Steps: (part 2)!
        ```scala
        a
        ```
        """,
        file_name="my doc.md",
    )
    (fragment,) = extract_fragments(document)
    assert fragment.slug == "my-doc_Next-Steps-part-2_1"


def test_document_without_fences(make_document) -> None:
    assert extract_fragments(make_document("# Only prose\ntext\n")) == []
