import unittest

from schoolsoft.model import Result, Results
from schoolsoft.parse import parse_results


def _result(element_id: str, date: str, title: str, kind: str, comment: str, teacher: str, description: str) -> str:
    return (
        '<div class="accordion-group">'
        '<div class="accordion-heading-left"><div>' + date + "</div><div>" + title + "</div></div>"
        '<div class="accordion-body" id="' + element_id + '">'
        '<div class="accordion_inner_left">'
        "<div>" + kind + "</div><div>Kommentar</div><div>" + comment + "</div>"
        "</div>"
        '<div class="accordion_inner_right">'
        "<div>" + description + "</div><div>Lärare</div><div>-</div><div>" + teacher + "</div>"
        "</div>"
        "</div>"
        "</div>"
    )


RESULTS_PAGE = (
    '<html><body><div id="result_con_content">'
    '<div id="accordion">'
    + _result(
        "collapse-event501", "2021-09-20", "Matematik 1c - Prov algebra", "Prov", "Bra jobbat!", "Eva Ek",
        '<p class="tinymce-p">Algebra och ekvationer</p><ul><li>Del A</li><li>Del B</li></ul>',
    )
    + "</div>"
    '<div id="accordion">'
    + _result("collapse-event9", "2021-05-02", "Svenska 1", "Inlämning", "", "Per Persson", "")
    + "</div>"
    "</div></body></html>"
)


class TestParseResults(unittest.TestCase):
    def test_new_result_fields(self) -> None:
        results = parse_results(RESULTS_PAGE)

        self.assertEqual(len(results.new), 1)
        self.assertEqual(
            results.new[0],
            Result(
                heading="Prov algebra",
                comment="Bra jobbat!",
                description="Algebra och ekvationer\n<li>Del A</li><li>Del B</li>\n",
                date="2021-09-20",
                lesson="Matematik 1c",
                teacher="Eva Ek",
                type="Prov",
                id=501,
            ),
        )

    def test_title_without_separator_has_no_heading(self) -> None:
        old = parse_results(RESULTS_PAGE).old

        self.assertEqual(len(old), 1)
        self.assertEqual(old[0].lesson, "Svenska 1")
        self.assertEqual(old[0].heading, "")
        self.assertEqual(old[0].description, "")
        self.assertEqual(old[0].id, 9)

    def test_empty_page_returns_empty_lists(self) -> None:
        self.assertEqual(parse_results('<div id="result_con_content"></div>'), Results(new=[], old=[]))


if __name__ == "__main__":
    unittest.main()
