"""Audit artefacts rendered from a :class:`~fairdraw.models.DrawResult`."""

from __future__ import annotations

import csv
import io
import json
from datetime import datetime
from typing import Optional

from .draw.statistics import summarize_random_values
from .models import DrawResult, Participant
from .models.utils import dt_iso, utc_now

RULE = "=" * 87
SECTION_RULE = "-" * 87


def report_filename(result: DrawResult, extension: str = "txt") -> str:
    """Return the conventional file name of an artefact for ``result``."""
    return f"contest-draw-audit-report-{result.draw_id}.{extension.lstrip('.')}"


def _participant_line(index: int, participant: Participant) -> str:
    return f"{index:>3}. {participant.name:<25} | {participant.email}"


def _section(title: str) -> list[str]:
    return [title, SECTION_RULE]


def render_text_report(result: DrawResult, *, generated_at: Optional[datetime] = None) -> str:
    """Render the human-readable audit report of ``result``.

    Parameters
    ----------
    result : DrawResult
        Completed draw to describe.
    generated_at : Optional[datetime], default: None
        Time printed as the report generation time; now when omitted.

    Returns
    -------
    str
        Multi-line plain text report.
    """
    generated = dt_iso(generated_at or utc_now())
    details = result.randomization
    summary = summarize_random_values(details.normalized_values)
    processing = result.processing

    lines: list[str] = [
        RULE,
        "COMPREHENSIVE CONTEST DRAW AUDIT REPORT".center(87).rstrip(),
        RULE,
        "",
        *_section("EXECUTIVE SUMMARY"),
        f"Contest Draw ID:           {result.draw_id}",
        f"Draw Date & Time:          {dt_iso(result.timestamp)}",
        f"Report Generated:          {generated}",
        f"Total Participants:        {result.total_participants}",
        f"Winners Selected:          {len(result.winners)}",
    ]
    if processing is not None:
        lines.append(f"CSV Format Detected:       {processing.dialect.label}")
    lines += [
        f"Randomization Method:      {result.random_source or 'not recorded'}",
        "Algorithm Used:            Fisher-Yates shuffle (Durstenfeld variant)",
        "",
    ]

    if processing is not None:
        validation = processing.validation
        lines += [
            *_section("CSV PROCESSING DETAILS"),
            f"Source Information:        {processing.source_info}",
            f"Total Entries Processed:   {validation.total_entries}",
            f"Valid Entries:             {validation.valid_entries}",
            f"Invalid Entries:           {validation.invalid_entries}",
            f"Duplicates Found:          {validation.duplicates_found}",
            f"Duplicates Removed:        {validation.duplicates_removed}",
            "",
            "Parsing Notes:",
            *(f"  * {note}" for note in processing.parsing_notes),
            "",
        ]

    lines += [
        *_section("COMPLETE PARTICIPANT LIST"),
        "All participants in original order (before randomization):",
        "",
        *(
            _participant_line(idx, p)
            for idx, p in enumerate(result.all_participants, start=1)
        ),
        "",
        *_section("DETAILED RANDOMIZATION PROCESS"),
        "Random Number Generation:",
        "  * One unsigned 32-bit value drawn per participant, in a single batch",
        f"  * Statistical Entropy:   {summary.entropy:.6f} bits",
        f"  * Mean Random Value:     {summary.mean:.6f}",
        f"  * Variance:              {summary.variance:.6f}",
        "",
        "Fisher-Yates Shuffle Process:",
        "  Step-by-step randomization (showing each swap operation):",
        "",
        *(
            f"  Step {step.step:>2}: {step.description:<35} | "
            f"Participant: {step.participant.name:<20} | "
            f"Random Value: {step.random_value:.6f} | "
            f"New Position: {step.new_position}"
            for step in details.shuffle_steps
        ),
        "",
        *_section("POST-SHUFFLE PARTICIPANT ORDER"),
        "Complete participant list after randomization (in selection order):",
        "",
        *(
            _participant_line(idx, p)
            for idx, p in enumerate(details.post_shuffle_order, start=1)
        ),
        "",
        *_section("WINNER SELECTION"),
        f"Selected first {len(result.winners)} participants from shuffled list:",
        "",
        *(
            f"  {rank:>2}. {winner.name:<25} | {winner.email}"
            for rank, winner in result.ranked_winners()
        ),
        "",
        *_section("TECHNICAL VERIFICATION DATA"),
        "Random values used (raw 32-bit / normalized 0-1):",
        *(
            f"  Position {idx:>2}: {raw:>10} / {raw / 2**32:.8f}"
            for idx, raw in enumerate(details.random_values)
        ),
        "",
        "Algorithm Implementation:",
        "  1. Draw one 32-bit random value per participant from the recorded source",
        "  2. For i from n-1 down to 1, swap position i with position (value[i] mod (i+1))",
        "  3. Select the first N participants from the shuffled list",
        "",
        *_section("VERIFICATION INSTRUCTIONS"),
        "To verify this draw:",
        "  1. Start from the participant list in original order.",
        "  2. Replay the shuffle with the raw random values listed above.",
        "  3. Confirm the replay equals the post-shuffle order.",
        "  4. Confirm the winners are its first N entries.",
        "",
        RULE,
        f"Report generated: {generated}",
        f"Draw ID: {result.draw_id}",
        RULE,
    ]
    return "\n".join(lines) + "\n"


def export_json(result: DrawResult, *, indent: Optional[int] = 2) -> str:
    """Serialise ``result`` to the JSON export format."""
    return json.dumps(result.to_json(), indent=indent, ensure_ascii=False)


def export_winners_csv(result: DrawResult) -> str:
    """Return the winners as ``rank,name,email`` CSV text with a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["rank", "name", "email"])
    for rank, winner in result.ranked_winners():
        writer.writerow([rank, winner.name, winner.email])
    return buffer.getvalue()


__all__ = [
    "export_json",
    "export_winners_csv",
    "render_text_report",
    "report_filename",
]
