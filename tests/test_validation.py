"""
Tests for the pure office/employee validation functions.

Covers:
  - office: required name/location, name length cap
  - employee: required fields, registration/course-count invariants
  - every violation is reported in one pass, in field order
"""

from datetime import datetime

from igot_tracker.services.validation import validate_employee, validate_office


def _employee(**overrides):
    fields = {
        "name": "Jo",
        "office_id": 1,
        "is_registered_on_igot": True,
        "courses_enrolled": 4,
        "courses_completed": 2,
        "report_date": datetime(2024, 1, 15),
    }
    fields.update(overrides)
    return fields


class TestValidateOffice:
    def test_valid_office_has_no_errors(self):
        assert validate_office({"name": "HQ", "location": "City A"}) == []

    def test_missing_name_and_location_reported_together(self):
        errors = validate_office({"name": "  ", "location": None})
        assert errors == ["Please add an office name", "Please add a location"]

    def test_name_longer_than_100_chars_rejected(self):
        errors = validate_office({"name": "x" * 101, "location": "City A"})
        assert errors == ["Name cannot be more than 100 characters"]

    def test_name_of_exactly_100_chars_accepted(self):
        assert validate_office({"name": "x" * 100, "location": "City A"}) == []

    def test_non_text_description_rejected(self):
        errors = validate_office({"name": "HQ", "location": "A", "description": 5})
        assert errors == ["Description must be text"]


class TestValidateEmployee:
    def test_valid_employee_has_no_errors(self):
        assert validate_employee(_employee()) == []

    def test_unregistered_with_courses_rejected(self):
        errors = validate_employee(
            _employee(is_registered_on_igot=False, courses_enrolled=3, courses_completed=0)
        )
        assert errors == ["Courses enrolled should be 0 if not registered on iGOT platform"]

    def test_completed_more_than_enrolled_rejected(self):
        errors = validate_employee(_employee(courses_enrolled=2, courses_completed=3))
        assert errors == ["Courses completed cannot be more than courses enrolled"]

    def test_completed_equal_to_enrolled_accepted(self):
        assert validate_employee(_employee(courses_enrolled=3, courses_completed=3)) == []

    def test_negative_counts_rejected(self):
        errors = validate_employee(_employee(courses_enrolled=-1, courses_completed=-2))
        assert errors == [
            "Courses enrolled cannot be negative",
            "Courses completed cannot be negative",
        ]

    def test_non_integer_counts_rejected(self):
        errors = validate_employee(_employee(courses_enrolled="4", courses_completed=1.5))
        assert errors == [
            "Courses enrolled must be a whole number",
            "Courses completed must be a whole number",
        ]

    def test_boolean_is_not_a_course_count(self):
        errors = validate_employee(_employee(courses_enrolled=True, courses_completed=0))
        assert errors == ["Courses enrolled must be a whole number"]

    def test_registration_flag_must_be_boolean(self):
        errors = validate_employee(
            _employee(is_registered_on_igot="yes", courses_enrolled=0, courses_completed=0)
        )
        assert errors == ["isRegisteredOnIGOT must be true or false"]

    def test_all_violations_aggregated_in_field_order(self):
        errors = validate_employee({
            "name": "",
            "office_id": None,
            "is_registered_on_igot": False,
            "courses_enrolled": 0,
            "courses_completed": 0,
            "report_date": None,
        })
        assert errors == [
            "Please add employee name",
            "Please add office",
            "Report date is required",
        ]

    def test_long_name_rejected(self):
        errors = validate_employee(_employee(name="y" * 101))
        assert errors == ["Name cannot be more than 100 characters"]

    def test_unparsed_report_date_rejected(self):
        errors = validate_employee(_employee(report_date="not-a-date"))
        assert errors == ["Report date is invalid"]
