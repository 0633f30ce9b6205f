import unittest

from college_scorecard.records import (
    CollegeSummary,
    escape_regex,
    get_field,
    region_for_state,
    type_from_ownership,
)


class TestRecordHelpers(unittest.TestCase):
    def test_get_field_reads_flat_and_nested_shapes(self):
        flat = {"school.name": "Yale University"}
        nested = {"school": {"name": "Yale University"}}
        self.assertEqual(get_field(flat, ("school", "name")), "Yale University")
        self.assertEqual(get_field(nested, ("school", "name")), "Yale University")
        self.assertIsNone(get_field({"school": {}}, ("school", "name")))
        self.assertIsNone(get_field({"school": "oops"}, ("school", "name")))

    def test_type_from_ownership(self):
        self.assertEqual(type_from_ownership(1), "Public")
        self.assertEqual(type_from_ownership(2), "Private (nonprofit)")
        self.assertEqual(type_from_ownership(3), "Private (for-profit)")
        self.assertEqual(type_from_ownership(4), "")
        self.assertEqual(type_from_ownership(None), "")
        self.assertEqual(type_from_ownership("1"), "")

    def test_region_for_state(self):
        self.assertEqual(region_for_state("NH"), "Northeast")
        self.assertEqual(region_for_state("oh"), "Midwest")
        self.assertEqual(region_for_state("TX"), "South")
        self.assertEqual(region_for_state("CA"), "West")
        self.assertEqual(region_for_state("PR"), "")
        self.assertEqual(region_for_state(None), "")

    def test_escape_regex(self):
        self.assertEqual(escape_regex("St. John's (NY)"), r"St\. John's \(NY\)")
        self.assertEqual(escape_regex("a+b*c?"), r"a\+b\*c\?")
        self.assertEqual(escape_regex("plain"), "plain")

    def test_summary_from_flat_record(self):
        record = {
            "id": 166027,
            "school.name": "Harvard University",
            "school.city": "Cambridge",
            "school.state": "MA",
            "school.ownership": 2,
            "school.school_url": "www.harvard.edu",
        }
        summary = CollegeSummary.from_record(record)
        self.assertEqual(summary.official_name, "Harvard University")
        self.assertEqual(summary.type, "Private (nonprofit)")
        self.assertEqual(summary.ipeds_id, 166027)
        self.assertEqual(summary.region, "Northeast")

    def test_summary_tolerates_missing_fields(self):
        summary = CollegeSummary.from_record({})
        self.assertEqual(summary.official_name, "")
        self.assertEqual(summary.ipeds_id, "")
        self.assertEqual(summary.region, "")


if __name__ == "__main__":
    unittest.main()
