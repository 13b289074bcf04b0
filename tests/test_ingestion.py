from __future__ import annotations

import unittest

from fairdraw.ingestion import (
    CsvDialect,
    detect_dialect,
    is_valid_email,
    name_from_email,
    parse,
    parse_with_report,
)
from fairdraw.models import Participant


class SimpleDialectTests(unittest.TestCase):
    def test_parses_name_email_pairs(self) -> None:
        result = parse("John Doe,john@example.com\nJane Smith,jane@example.com")
        self.assertEqual(
            result,
            [
                Participant(name="John Doe", email="john@example.com"),
                Participant(name="Jane Smith", email="jane@example.com"),
            ],
        )

    def test_trims_fields_and_skips_blank_lines(self) -> None:
        result = parse("  John Doe , john@example.com \n\nJane Smith, jane@example.com")
        self.assertEqual(
            result,
            [
                Participant(name="John Doe", email="john@example.com"),
                Participant(name="Jane Smith", email="jane@example.com"),
            ],
        )

    def test_empty_and_whitespace_only_text(self) -> None:
        self.assertEqual(parse(""), [])
        self.assertEqual(parse("   \n  \n  "), [])

    def test_rows_missing_a_field_are_skipped(self) -> None:
        text = (
            "John Doe,john@example.com\n"
            "Jane Smith\n"
            ",jane@example.com\n"
            ",\n"
            "Bob Wilson,bob@example.com"
        )
        self.assertEqual(
            [p.name for p in parse(text)],
            ["John Doe", "Bob Wilson"],
        )

    def test_extra_fields_are_truncated(self) -> None:
        result = parse("John Doe,john@example.com,extra,data\nJane Smith,jane@example.com,")
        self.assertEqual(
            result,
            [
                Participant(name="John Doe", email="john@example.com"),
                Participant(name="Jane Smith", email="jane@example.com"),
            ],
        )

    def test_mixed_line_endings(self) -> None:
        text = "John Doe,john@example.com\r\nJane Smith,jane@example.com\nBob Wilson,bob@example.com\r\n"
        self.assertEqual(len(parse(text)), 3)
        self.assertEqual(parse(text)[0].email, "john@example.com")

    def test_quotes_are_kept_literally(self) -> None:
        result = parse('Jane "Jane" Smith,jane@example.com')
        self.assertEqual(result, [Participant(name='Jane "Jane" Smith', email="jane@example.com")])

    def test_name_email_header_row_is_skipped(self) -> None:
        report = parse_with_report("name,email\nJosé María,jose@example.com\n李小明,li@example.com")
        self.assertEqual(report.dialect, CsvDialect.SIMPLE)
        self.assertEqual(
            list(report.participants),
            [
                Participant(name="José María", email="jose@example.com"),
                Participant(name="李小明", email="li@example.com"),
            ],
        )
        self.assertIn("Header row skipped", report.notes)
        self.assertEqual(report.validation.total_entries, 2)

    def test_header_only_file_has_no_participants(self) -> None:
        self.assertEqual(parse("name,email"), [])


class FormExportDialectTests(unittest.TestCase):
    def test_synthesises_name_from_email(self) -> None:
        text = 'Timestamp,Email Address,Response\n2025-09-24 14:35:05,lbooth@payments.ca,"..."'
        self.assertEqual(
            parse(text),
            [Participant(name="Lbooth", email="lbooth@payments.ca")],
        )

    def test_quoted_fields_with_commas_and_escaped_quotes(self) -> None:
        text = (
            "Timestamp,Email Address,Comment\n"
            '"2025-09-24 14:35:05","mary_jane.o-neil@example.com","Yes, I agree ""fully"""\n'
            '2025-09-24 14:36:00, "JOHN.DOE@example.com" ,ok'
        )
        self.assertEqual(
            parse(text),
            [
                Participant(name="Mary Jane O Neil", email="mary_jane.o-neil@example.com"),
                Participant(name="John Doe", email="JOHN.DOE@example.com"),
            ],
        )

    def test_invalid_rows_are_skipped_and_counted(self) -> None:
        text = (
            "\n\nTimestamp,Email Address\n"
            "2025-09-24,not-an-email\n"
            "2025-09-24\n"
            "2025-09-24,user@nodot\n"
            "2025-09-24,ok@example.com\n"
        )
        report = parse_with_report(text)
        self.assertEqual(report.dialect, CsvDialect.FORM_EXPORT)
        self.assertEqual([p.email for p in report.participants], ["ok@example.com"])
        self.assertEqual(report.validation.total_entries, 4)
        self.assertEqual(report.validation.valid_entries, 1)
        self.assertEqual(report.validation.invalid_entries, 3)
        self.assertIn("3 row(s) skipped as invalid", report.notes)

    def test_email_marker_alone_selects_form_export(self) -> None:
        self.assertEqual(detect_dialect("Name,Email"), CsvDialect.FORM_EXPORT)
        self.assertEqual(detect_dialect("name,email"), CsvDialect.SIMPLE)
        self.assertEqual(detect_dialect(None), CsvDialect.SIMPLE)


class HelperTests(unittest.TestCase):
    def test_email_validation(self) -> None:
        self.assertTrue(is_valid_email("a@b.co"))
        self.assertFalse(is_valid_email("a b@c.com"))
        self.assertFalse(is_valid_email("a@@c.com"))
        self.assertFalse(is_valid_email("a@c"))
        self.assertFalse(is_valid_email(""))

    def test_name_from_email_capitalises_each_word(self) -> None:
        self.assertEqual(name_from_email("jOHN.smith@example.com"), "John Smith")
        self.assertEqual(name_from_email("anna-lena_k@example.com"), "Anna Lena K")


class DuplicateHandlingTests(unittest.TestCase):
    TEXT = (
        "John,john@example.com\n"
        "Invalid Line\n"
        "Jane,jane@example.com\n"
        "John again,john@example.com\n"
        "\n"
    )

    def test_duplicates_are_kept_by_default(self) -> None:
        report = parse_with_report(self.TEXT)
        self.assertEqual(len(report.participants), 3)
        self.assertEqual(report.validation.total_entries, 4)
        self.assertEqual(report.validation.valid_entries, 3)
        self.assertEqual(report.validation.invalid_entries, 1)
        self.assertEqual(report.validation.duplicates_found, 1)
        self.assertEqual(report.validation.duplicates_removed, 0)

    def test_deduplicate_keeps_first_occurrence(self) -> None:
        report = parse_with_report(self.TEXT, deduplicate=True)
        self.assertEqual(
            [p.name for p in report.participants],
            ["John", "Jane"],
        )
        self.assertEqual(report.validation.duplicates_removed, 1)
        self.assertIn("1 duplicate email(s) removed", report.notes)

    def test_parse_is_idempotent(self) -> None:
        self.assertEqual(parse(self.TEXT), parse(self.TEXT))

    def test_processing_details_mirror_report(self) -> None:
        report = parse_with_report(self.TEXT)
        details = report.to_processing_details()
        self.assertEqual(details.dialect, CsvDialect.SIMPLE)
        self.assertEqual(details.validation, report.validation)
        self.assertEqual(details.parsing_notes, report.notes)
        self.assertIn("3 participants loaded", details.source_info)


if __name__ == "__main__":
    unittest.main()
