import json
import unittest

from schoolsoft.model import LunchDay, LunchMenu, NewsCategory, NewsItem, to_dict


class TestToDict(unittest.TestCase):
    def test_lunch_menu(self) -> None:
        menu = LunchMenu(heading="Vecka 37", menu=[LunchDay(title="Måndag", lunch="Soppa")])
        self.assertEqual(to_dict(menu), {"heading": "Vecka 37", "menu": [{"title": "Måndag", "lunch": "Soppa"}]})

    def test_news_from_field_is_exported_as_from(self) -> None:
        news = [NewsCategory(category="Skolan", news=[NewsItem("Lov", "", "2021-10-01", "Rektor", "Alla")])]
        data = to_dict(news)

        self.assertEqual(data[0]["news"][0]["from"], "Rektor")
        self.assertNotIn("from_", data[0]["news"][0])
        # must be JSON serializable as-is
        json.dumps(data)

    def test_records_are_immutable_and_compare_by_value(self) -> None:
        a = LunchDay(title="Måndag", lunch="Soppa")
        self.assertEqual(a, LunchDay(title="Måndag", lunch="Soppa"))
        with self.assertRaises(AttributeError):
            a.title = "Tisdag"  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
