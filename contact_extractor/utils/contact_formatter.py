"""
Contact Formatter - Render extracted contacts for display and copying

All functions are pure: the same contacts and format always give the same
output. Rich (HTML) output is built from DetailEntry fragments and every
piece of contact data is escaped before it reaches markup.
"""

from dataclasses import dataclass
from typing import List, Sequence

from markupsafe import Markup, escape

from contact_extractor.models.contact import Contact, DetailFormat

BULLET_PREFIX = "• "
ENTRY_SEPARATOR = "\n\n"
EMPTY_CELL = "-"


@dataclass(frozen=True)
class DetailEntry:
    """One contact in the labeled detail view: bold part plus the rest"""

    bold: str
    rest: str

    @property
    def plain(self) -> str:
        return " ".join(part for part in (self.bold, self.rest) if part)


@dataclass(frozen=True)
class DetailView:
    """Parallel plain-text and HTML renderings of the same entries"""

    plain: str
    html: str


@dataclass(frozen=True)
class TableRow:
    name: str
    email: str
    title: str
    phone: str


def recipient_format(contacts: Sequence[Contact]) -> str:
    """
    Format contacts for the To/Cc field of an email client

    Args:
        contacts: Extracted contacts

    Returns:
        "Name <email>; Name <email>; " or "" when there are no contacts
    """
    if not contacts:
        return ""
    return "; ".join(f"{c.name} <{c.email}>" for c in contacts) + "; "


def simple_detail_format(contacts: Sequence[Contact]) -> str:
    """
    One contact per line: Name, Email, Title, Phone

    Empty fields are skipped, so a line never holds an empty ", " slot.
    """
    lines = []
    for c in contacts:
        parts = [p for p in (c.name, c.email, c.title, c.phone) if p.strip() != ""]
        lines.append(", ".join(parts))
    return "\n".join(lines)


def build_detail_entries(contacts: Sequence[Contact]) -> List[DetailEntry]:
    """
    Build labeled detail fragments, one per contact, in contact order

    The name goes in the bold part; the title (parenthesized), email and
    phone follow when present.
    """
    entries = []
    for c in contacts:
        title, email, phone = c.title.strip(), c.email.strip(), c.phone.strip()
        rest = []
        if title:
            rest.append(f"({title})")
        if email:
            rest.append(email)
        if phone:
            rest.append(phone)
        entries.append(DetailEntry(bold=c.name.strip(), rest=" ".join(rest)))
    return entries


def render_entry_html(entry: DetailEntry) -> Markup:
    parts = []
    if entry.bold:
        parts.append(Markup("<strong>{}</strong>").format(entry.bold))
    if entry.rest:
        parts.append(escape(entry.rest))
    return Markup(" ").join(parts)


def render_plain(entries: Sequence[DetailEntry], style: DetailFormat) -> str:
    if style is DetailFormat.BULLET:
        lines = [f"{BULLET_PREFIX}{e.plain}" for e in entries]
    elif style is DetailFormat.NUMBER:
        lines = [f"{i + 1}. {e.plain}" for i, e in enumerate(entries)]
    else:
        lines = [e.plain for e in entries]
    return ENTRY_SEPARATOR.join(lines)


def render_html(entries: Sequence[DetailEntry], style: DetailFormat) -> str:
    if not entries:
        return ""
    if style is DetailFormat.SIMPLE:
        return "".join(
            str(Markup("<p>{}</p>").format(render_entry_html(e))) for e in entries
        )

    tag = "ol" if style is DetailFormat.NUMBER else "ul"
    items = "".join(
        str(Markup("<li>{}</li>").format(render_entry_html(e))) for e in entries
    )
    return f"<{tag}>{items}</{tag}>"


def labeled_detail_format(
    contacts: Sequence[Contact],
    style: DetailFormat = DetailFormat.SIMPLE,
) -> DetailView:
    """
    Render the labeled detail view in the selected style

    Args:
        contacts: Extracted contacts
        style: simple, bullet or number

    Returns:
        DetailView with plain text and HTML built from the same entries
    """
    entries = build_detail_entries(contacts)
    return DetailView(
        plain=render_plain(entries, style),
        html=render_html(entries, style),
    )


def table_rows(contacts: Sequence[Contact]) -> List[TableRow]:
    """Structured view rows; empty fields are shown as '-'"""
    return [
        TableRow(
            name=c.name or EMPTY_CELL,
            email=c.email or EMPTY_CELL,
            title=c.title or EMPTY_CELL,
            phone=c.phone or EMPTY_CELL,
        )
        for c in contacts
    ]
