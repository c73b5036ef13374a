"""
Unit tests for the assignments ("test" page) extractor.

The page has two "#accordion" containers: upcoming first, old second.
Each entry's numeric id is encoded in the id of the element that wraps
.accordion_inner_left, e.g. "collapse-event12345".
"""

import unittest

from schoolsoft.model import Assignments
from schoolsoft.parse import parse_assignments, parse_element_id


def _entry(element_id: str, date: str, heading: str, kind: str, lesson: str, teacher: str, body: str) -> str:
    id_attr = f' id="{element_id}"' if element_id else ""
    return f"""
    <div class="accordion-group">
      <div class="accordion-heading">
        <div class="accordion-heading-left"><div>{date}</div><div>{heading}</div></div>
        <div class="accordion-heading-right"><div>{kind}</div><div>{lesson}</div></div>
      </div>
      <div class="accordion-body"{id_attr}>
        <div class="accordion_inner_left">{body}</div>
        <div class="accordion_inner_right"><div>Lärare</div><div>{teacher}</div></div>
      </div>
    </div>
    """


UPCOMING = _entry(
    "collapse-event12345", "2021-10-04", "Prov kapitel 3", "Prov", "Matematik 1c", "Eva Ek",
    '<p class="tinymce-p">Kapitel 3.1-3.4</p><ul><li>Miniräknare</li></ul>',
) + _entry(
    "collapse-event777", "2021-10-08", "Inlämning essä", "Inlämning", "Svenska 1", "Per Persson",
    '<p class="tinymce-p">Max 2 sidor</p>',
)
OLD = _entry("", "2021-09-01", "Diagnos", "Diagnos", "Engelska 5", "Kim Berg", "")

ASSIGNMENTS_PAGE = (
    '<html><body><div id="test_con_content">'
    '<div class="h3_bold">Kommande</div>'
    '<div id="accordion">' + UPCOMING + "</div>"
    '<div class="h3_bold">Gamla</div>'
    '<div id="accordion">' + OLD + "</div>"
    "</div></body></html>"
)


class TestParseAssignments(unittest.TestCase):
    def test_counts_match_each_container(self) -> None:
        assignments = parse_assignments(ASSIGNMENTS_PAGE)
        self.assertEqual(len(assignments.upcoming), 2)
        self.assertEqual(len(assignments.old), 1)

    def test_upcoming_fields(self) -> None:
        first = parse_assignments(ASSIGNMENTS_PAGE).upcoming[0]

        self.assertEqual(first.date, "2021-10-04")
        self.assertEqual(first.heading, "Prov kapitel 3")
        self.assertEqual(first.type, "Prov")
        self.assertEqual(first.lesson, "Matematik 1c")
        self.assertEqual(first.teacher, "Eva Ek")
        self.assertEqual(first.content, "Kapitel 3.1-3.4\n<li>Miniräknare</li>\n")
        self.assertEqual(first.id, 12345)

    def test_ids_are_parsed_or_zero(self) -> None:
        assignments = parse_assignments(ASSIGNMENTS_PAGE)
        self.assertEqual([a.id for a in assignments.upcoming], [12345, 777])
        # wrapper without id attribute
        self.assertEqual(assignments.old[0].id, 0)
        self.assertEqual(assignments.old[0].content, "")

    def test_empty_page_returns_empty_lists(self) -> None:
        self.assertEqual(parse_assignments('<div id="test_con_content"></div>'), Assignments(upcoming=[], old=[]))
        self.assertEqual(parse_assignments(""), Assignments(upcoming=[], old=[]))

    def test_single_container_has_no_old(self) -> None:
        page = '<div id="test_con_content"><div id="accordion"></div></div>'
        self.assertEqual(parse_assignments(page), Assignments(upcoming=[], old=[]))


class TestParseElementId(unittest.TestCase):
    def test_valid_id(self) -> None:
        self.assertEqual(parse_element_id("collapse-event12345"), 12345)

    def test_invalid_ids_default_to_zero(self) -> None:
        self.assertEqual(parse_element_id(None), 0)
        self.assertEqual(parse_element_id(""), 0)
        self.assertEqual(parse_element_id("collapse"), 0)
        self.assertEqual(parse_element_id("collapse-eventabc"), 0)

    def test_trailing_text_is_ignored(self) -> None:
        self.assertEqual(parse_element_id("collapse-event42-extra"), 42)


if __name__ == "__main__":
    unittest.main()
