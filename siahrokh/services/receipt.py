"""Printable HTML registration receipt."""
from __future__ import annotations

import re
from html import escape

from siahrokh.models import Registration, Tournament

SITE_NAME = "SiahRokh"
SITE_HOST = "siahrokh.ir"

_STYLE = """
body { font-family: Arial, sans-serif; margin: 20px; font-size: 14px; color: #000; background: #fff; }
.header { text-align: center; margin-bottom: 30px; border-bottom: 2px solid #000; padding-bottom: 15px; }
.header h1 { font-size: 20px; margin: 0 0 10px 0; }
table { width: 100%; border-collapse: collapse; margin-bottom: 20px; }
th, td { border: 1px solid #000; padding: 8px; text-align: left; }
th { background-color: #f0f0f0; font-weight: bold; }
.section-header td { background-color: #e0e0e0; font-weight: bold; text-align: center; }
"""


def _row(label: str, value) -> str:
    return f"<tr><th>{escape(label)}</th><td>{escape(str(value))}</td></tr>"


def _section(title: str, rows: list[str]) -> str:
    return (
        f'<table><tr class="section-header"><td colspan="2">{escape(title)}</td></tr>'
        + "".join(rows)
        + "</table>"
    )


def render_receipt_html(registration: Registration, tournament: Tournament) -> str:
    """Receipt with tournament, participant and venue sections. All values are HTML-escaped."""
    tournament_rows = [
        _row("Tournament Name", tournament.name),
        _row("Date", tournament.date.strftime("%Y-%m-%d")),
        _row("Time", tournament.time),
        _row("Registration Status", "Open" if tournament.is_open else "Closed"),
    ]
    if tournament.registration_fee:
        tournament_rows.append(_row("Registration Fee", tournament.registration_fee))

    participant_rows = [
        _row("Full Name", registration.name),
        _row("Phone Number", registration.phone),
        _row("Registration ID", "#" + registration.id[:8].upper()),
        _row("Certificate ID", registration.certificate_id),
        _row("Certificate Status", "Confirmed" if registration.certificate_confirmed else "Pending review"),
        _row("Registration Date", registration.created_at.strftime("%Y-%m-%d")),
    ]
    if registration.description:
        participant_rows.append(_row("Notes", registration.description))

    venue_rows = [_row("Address", tournament.venue_address)]
    if tournament.venue_info:
        venue_rows.append(_row("Additional Info", tournament.venue_info))

    return (
        "<!DOCTYPE html><html><head><meta charset=\"UTF-8\">"
        f"<title>{escape(SITE_NAME)} - {escape(tournament.name)}</title>"
        f"<style>{_STYLE}</style></head><body>"
        f'<div class="header"><h1>{escape(SITE_NAME)} Chess Tournament Registration</h1>'
        f"<p>Tournament Registration Details</p><p>{escape(SITE_HOST)}</p></div>"
        + _section("TOURNAMENT INFORMATION", tournament_rows)
        + _section("PARTICIPANT INFORMATION", participant_rows)
        + _section("VENUE INFORMATION", venue_rows)
        + "</body></html>"
    )


def receipt_filename(tournament: Tournament) -> str:
    """e.g. SiahRokh-Spring-Open-20260301.html"""
    name = re.sub(r"[^a-zA-Z0-9]", "-", tournament.name)
    return f"{SITE_NAME}-{name}-{tournament.date.strftime('%Y%m%d')}.html"
