"""PDF generation for roster output.

This module creates printable PDF rosters showing:
- One colour-coded grid per week (dates down, members across)
- A monthly summary page with shift counts and workday gaps
"""

from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from socroster.domain.models import MemberShiftSummary, RosterDay, ShiftCode
from socroster.domain.policies import FixedWeekendPolicy, WeekendPolicy
from socroster.output.text_report import SHIFT_ABBREVIATIONS, format_gap
from socroster.reporting.week_grouper import group_by_week

# Color definitions (RGB tuples, 0-1 scale)
COLORS = {
    ShiftCode.REGULAR: (0.82, 0.95, 0.84),  # Green
    ShiftCode.MORNING: (0.82, 0.89, 0.99),  # Blue
    ShiftCode.NOON: (0.99, 0.93, 0.78),  # Amber
    ShiftCode.EVENING: (0.92, 0.85, 0.98),  # Purple
    ShiftCode.NIGHT: (0.86, 0.87, 0.99),  # Indigo
    ShiftCode.OFFDAY: (0.85, 0.85, 0.85),  # Gray
    ShiftCode.LEAVE: (0.99, 0.83, 0.83),  # Red
    "unknown": (1.0, 1.0, 1.0),
    "weekend": (0.86, 0.92, 1.0),
}


def _canvas_module():
    try:
        from reportlab.lib.pagesizes import landscape, letter
        from reportlab.pdfgen import canvas
    except ImportError:
        raise ImportError(
            "reportlab is required for PDF generation. "
            "Install with: pip install reportlab"
        )
    return canvas, landscape(letter)


class RosterPDFGenerator:
    """Generates printable PDF rosters.

    Example:
        >>> generator = RosterPDFGenerator()
        >>> generator.generate(days, summaries, members, "roster.pdf")
    """

    def __init__(
        self,
        page_width: float = 792,  # Letter landscape width (11")
        page_height: float = 612,  # Letter landscape height (8.5")
        margin: float = 36,  # 0.5 inch margins
        weekend_policy: Optional[WeekendPolicy] = None,
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin
        self.weekend_policy = weekend_policy or FixedWeekendPolicy()

    def generate(
        self,
        days: list[RosterDay],
        summaries: dict[str, MemberShiftSummary],
        members: list[str],
        output_path: Union[str, Path],
        include_summary: bool = True,
    ) -> None:
        """Generate the roster PDF and save it to a file."""
        canvas, pagesize = _canvas_module()
        c = canvas.Canvas(str(output_path), pagesize=pagesize)
        self._draw(c, days, summaries, members, include_summary)
        c.save()

    def generate_to_buffer(
        self,
        days: list[RosterDay],
        summaries: dict[str, MemberShiftSummary],
        members: list[str],
        include_summary: bool = True,
    ) -> BytesIO:
        """Generate the roster PDF and return it as a bytes buffer."""
        canvas, pagesize = _canvas_module()
        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=pagesize)
        self._draw(c, days, summaries, members, include_summary)
        c.save()
        buffer.seek(0)
        return buffer

    def _draw(self, c, days, summaries, members, include_summary: bool) -> None:
        weeks = group_by_week(days)
        for index, week in enumerate(weeks, 1):
            self._draw_week_page(c, index, len(weeks), week.days, members)
        if include_summary or not weeks:
            self._draw_summary_page(c, days, summaries)

    def _title(self, days: list[RosterDay]) -> str:
        if not days:
            return "Roster"
        return f"Roster - {days[0].date.strftime('%B %Y')}"

    def _draw_week_page(
        self,
        c,
        index: int,
        total: int,
        days: list[RosterDay],
        members: list[str],
    ) -> None:
        """Draw one week as a grid of shift cells."""
        c.setFont("Helvetica-Bold", 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"{self._title(days)} - Week {index}",
        )
        c.setFont("Helvetica", 10)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 35,
            f"{days[0].date.strftime('%d %b')} to {days[-1].date.strftime('%d %b %Y')}",
        )

        label_width = 110
        grid_left = self.margin + label_width
        grid_width = self.page_width - self.margin - grid_left
        col_width = grid_width / max(1, len(members))
        row_height = 28
        y = self.page_height - self.margin - 70

        # Member header
        c.setFont("Helvetica-Bold", 8)
        for col, member in enumerate(members):
            c.drawCentredString(grid_left + col * col_width + col_width / 2, y + 6, member[:12])

        for day in days:
            y -= row_height
            weekend = self.weekend_policy.is_weekend(day.date)
            if weekend:
                c.setFillColorRGB(*COLORS["weekend"])
                c.rect(self.margin, y, label_width - 4, row_height - 2, fill=1, stroke=0)
            c.setFillColorRGB(0, 0, 0)
            c.setFont("Helvetica", 9)
            c.drawString(self.margin + 2, y + 10, f"{day.date.strftime('%d %b')} {day.day[:3]}")

            for col, member in enumerate(members):
                code = day.shift_for(member)
                x = grid_left + col * col_width
                c.setFillColorRGB(*COLORS.get(code, COLORS["unknown"]))
                c.setStrokeColorRGB(0.7, 0.7, 0.7)
                c.rect(x + 1, y, col_width - 2, row_height - 2, fill=1, stroke=1)
                c.setFillColorRGB(0, 0, 0)
                c.setFont("Helvetica-Bold", 8)
                if code is not None:
                    label = SHIFT_ABBREVIATIONS[code]
                else:
                    label = str(day.raw_shift(member) or "")[:6]
                c.drawCentredString(x + col_width / 2, y + 10, label)

            if day.notes:
                c.setFont("Helvetica-Oblique", 6)
                c.drawString(self.margin + 2, y + 2, f"{len(day.notes)} note(s)")

        self._draw_legend(c, self.margin, self.margin + 10)

        c.setFont("Helvetica", 9)
        c.drawCentredString(self.page_width / 2, self.margin - 10, f"Week {index} of {total}")
        c.showPage()

    def _draw_legend(self, c, x: float, y: float) -> None:
        """Draw legend for shift colours."""
        c.setFont("Helvetica-Bold", 8)
        c.setFillColorRGB(0, 0, 0)
        c.drawString(x, y, "Legend:")

        c.setFont("Helvetica", 7)
        current_x = x + 45
        for code in ShiftCode:
            c.setFillColorRGB(*COLORS[code])
            c.rect(current_x, y - 2, 12, 10, fill=1, stroke=1)
            c.setFillColorRGB(0, 0, 0)
            c.drawString(current_x + 15, y, code.value.title())
            current_x += 75

    def _draw_summary_page(
        self,
        c,
        days: list[RosterDay],
        summaries: dict[str, MemberShiftSummary],
    ) -> None:
        """Draw the monthly summary table."""
        c.setFont("Helvetica-Bold", 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"{self._title(days)} - Summary",
        )

        y = self.page_height - self.margin - 50
        c.setFont("Helvetica", 10)
        if summaries:
            total = next(iter(summaries.values())).total_workdays_in_month
            c.drawString(self.margin, y, f"Nominal workdays in month: {total}")
        else:
            c.drawString(self.margin, y, "No members to summarize.")
        y -= 30

        columns = ["Member"] + [code.value for code in ShiftCode] + ["Workdays", "Gap"]
        col_width = (self.page_width - 2 * self.margin) / len(columns)

        c.setFont("Helvetica-Bold", 8)
        for col, label in enumerate(columns):
            c.drawString(self.margin + col * col_width, y, label)
        y -= 16

        c.setFont("Helvetica", 9)
        for name, summary in summaries.items():
            values = [name] + [str(summary.count(code)) for code in ShiftCode]
            values += [str(summary.workdays), format_gap(summary.gap)]
            for col, value in enumerate(values):
                if col == len(values) - 1 and summary.gap != 0:
                    if summary.gap < 0:
                        c.setFillColorRGB(0.75, 0.1, 0.1)
                    else:
                        c.setFillColorRGB(0.1, 0.55, 0.2)
                c.drawString(self.margin + col * col_width, y, value)
                c.setFillColorRGB(0, 0, 0)
            y -= 16
            if y < self.margin + 20:
                c.showPage()
                c.setFont("Helvetica", 9)
                y = self.page_height - self.margin - 20

        c.showPage()
