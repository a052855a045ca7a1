"""
Node construction.

One primary node per visible entity, plus synthetic nodes derived from a
company's nested facts:

- a tax debt node ``ato_<companyId>`` whenever ATO data is present
  (teal for a zero balance, red otherwise);
- one node per court case, shared between every company that references
  the same case UUID within a build pass.

Tooltips are HTML fragments made only from the fields that are present.
"""

from .config import (
    ADDRESS_LABEL_MAX,
    CASE_LABEL_LINE,
    TOOLTIP_CASE_LIMIT,
    TOOLTIP_LINK_LIMIT,
)
from .edges import ato_edge, court_case_edge
from .formatting import escape, format_aud, format_date
from .styles import (
    ADDRESS_RULES,
    ATO_RULES,
    BANKRUPTCY_RULES,
    COLORS,
    COMPANY_RULES,
    PERSON_RULES,
    first_match,
    node_color,
)
from .text_wrap import wrap

WHITE = "#ffffff"


def _node(node_id, category, label, title, shape, color, font, size, margin):
    return {
        "id": node_id,
        "category": category,
        "label": label,
        "title": title,
        "shape": shape,
        "color": color,
        "font": font,
        "size": size,
        "margin": margin,
    }


# Companies

def company_tooltip(company):
    tooltip = f"<b>{escape(company.name)}</b><br>ACN: {escape(company.acn or 'N/A')}"

    cases = company.court_cases
    if cases:
        tooltip += f"<br><br><b>Court Cases:</b> {len(cases)}"
        for idx, case in enumerate(cases[:TOOLTIP_CASE_LIMIT], start=1):
            tooltip += (
                f"<br>{idx}. {escape(case.case_number or 'N/A')}"
                f" - {escape(case.case_type or 'N/A')}"
            )
            if case.court_name:
                tooltip += f" ({escape(case.court_name)})"
        if len(cases) > TOOLTIP_CASE_LIMIT:
            tooltip += f"<br>... and {len(cases) - TOOLTIP_CASE_LIMIT} more"
    return tooltip


def company_node(company):
    return _node(
        company.id,
        "company",
        wrap(company.name or "Unknown Company"),
        company_tooltip(company),
        "box",
        node_color(COMPANY_RULES, company),
        {"color": WHITE, "size": 14, "bold": True},
        40,
        20,
    )


def ato_node_id(company_id):
    return f"ato_{company_id}"


def ato_node(company):
    """Tax debt node for a company with ATO data."""
    ato = company.ato_data
    amount = format_aud(ato.amount or 0)

    tooltip = f"<b>ATO Tax Debt</b><br>Amount: {amount}"
    if ato.status:
        tooltip += f"<br>Status: {escape(ato.status)}"
    if ato.updated_at:
        tooltip += f"<br>Updated: {format_date(ato.updated_at)}"

    return _node(
        ato_node_id(company.id),
        "ato",
        wrap(amount),
        tooltip,
        "ellipse",
        node_color(ATO_RULES, ato),
        {"color": WHITE, "size": 12, "bold": True},
        50,
        10,
    )


def court_case_node_id(company, case, index):
    # Without a UUID the identity falls back to the company and list position
    if case.uuid:
        return f"court_case_{case.uuid}"
    return f"court_case_{company.id}_{index}"


def court_case_type(case):
    return case.case_type or case.type or "Court Case"


def two_lines(text, width=CASE_LABEL_LINE):
    """Split text onto at most two lines, the first no wider than width."""
    if len(text) <= width:
        return text
    words = text.split(" ")
    if len(words) == 1:
        mid = (len(text) + 1) // 2
        return f"{text[:mid]}\n{text[mid:]}"

    first = words[0]
    rest = words[1:]
    while rest and len(f"{first} {rest[0]}") <= width:
        first = f"{first} {rest.pop(0)}"
    return "\n".join([first, " ".join(rest)]) if rest else first


def court_case_label(case):
    case_type = court_case_type(case)
    if " - " in case_type:
        # "CORPORATIONS - WINDING UP" -> "WINDING UP"
        case_type = case_type.split(" - ")[1] or case_type
    return wrap(two_lines(case_type.upper()))


def court_case_tooltip(case):
    tooltip = (
        f"<b>{escape(court_case_type(case))}</b>"
        f"<br>Case Number: {escape(case.case_number or 'N/A')}"
    )
    if case.case_name:
        tooltip += f"<br>Case Name: {escape(case.case_name)}"
    if case.court_name:
        tooltip += f"<br>Court: {escape(case.court_name)}"
    if case.state:
        tooltip += f"<br>State: {escape(case.state)}"
    if case.party_role:
        tooltip += f"<br>Role: {escape(case.party_role)}"
    if case.notification_time:
        tooltip += f"<br>Notification: {format_date(case.notification_time)}"
    if case.url:
        tooltip += f'<br><a href="{escape(case.url)}" target="_blank">View Details</a>'
    return tooltip


def court_case_node(node_id, case):
    return _node(
        node_id,
        "court_case",
        court_case_label(case),
        court_case_tooltip(case),
        "circle",
        dict(COLORS["court_case"]),
        {"color": WHITE, "size": 11},
        50,
        10,
    )


def company_facts(company, seen_cases):
    """Synthetic nodes and edges derived from a company's tax and court data.

    seen_cases is shared across every company in a build pass; a case node
    is emitted once, while each referencing company still gets its edge.
    """
    nodes = []
    edges = []

    if company.ato_data is not None:
        node = ato_node(company)
        nodes.append(node)
        zero_debt = first_match(ATO_RULES, company.ato_data) == "ato_zero"
        edges.append(ato_edge(company.id, node["id"], zero_debt))

    for index, case in enumerate(company.court_cases):
        case_id = court_case_node_id(company, case, index)
        if case_id not in seen_cases:
            seen_cases.add(case_id)
            nodes.append(court_case_node(case_id, case))
        edges.append(court_case_edge(company.id, case_id, case.case_number or "N/A"))

    return nodes, edges


# Persons

def role_name(role):
    if role.type == "director":
        return "Former Director" if role.original_type == "ceased_director" else "Director"
    if role.type == "officeholder":
        name = role.role or "Office Holder"
        return f"Former {name}" if role.original_type == "ceased_officeholder" else name
    if role.type == "secretary":
        return "Secretary"
    return role.type


def person_roles(person):
    names = [role_name(role) for role in person.roles]
    return ", ".join(name for name in names if name) or "Person"


def person_node(person):
    tooltip = f"<b>{escape(person.name)}</b><br>Roles: {escape(person_roles(person))}"
    if person.dob:
        tooltip += f"<br>DOB: {escape(person.dob)}"
    return _node(
        person.id,
        "person",
        wrap(person.name),
        tooltip,
        "circle",
        node_color(PERSON_RULES, person),
        {"color": WHITE, "size": 12},
        30,
        8,
    )


# Shareholders

def shareholder_node(shareholder):
    tooltip = f"<b>{escape(shareholder.name)}</b><br>Shareholder"
    if shareholder.shares:
        tooltip += f"<br>Shares: {escape(shareholder.shares)}"
    return _node(
        shareholder.id,
        "shareholder",
        wrap(shareholder.name),
        tooltip,
        "circle",
        dict(COLORS["shareholder"]),
        {"color": WHITE, "size": 12},
        25,
        8,
    )


# Addresses

def address_label(address):
    label = address.address or ""
    if len(label) > ADDRESS_LABEL_MAX:
        if address.suburb:
            return address.suburb
        return label[:ADDRESS_LABEL_MAX - 3] + "..."
    return label


def address_tooltip(address, catalog):
    tooltip = f"<b>{escape(address.type or 'Address')}</b><br>{escape(address.address or '')}"
    if address.suburb:
        tooltip += f"<br>{escape(address.suburb)}"
    if address.state or address.postcode:
        region = " ".join(part for part in (address.state, address.postcode) if part)
        tooltip += f"<br>{escape(region)}"
    if address.start_date:
        tooltip += f"<br>From: {format_date(address.start_date)}"
    if address.end_date:
        tooltip += f"<br>To: {format_date(address.end_date)}"

    names = [catalog.name_of(entity_id) for entity_id in address.linked_ids]
    names = [name for name in names if name]
    if names:
        tooltip += f"<br><br><b>Linked to ({len(names)}):</b>"
        for name in names[:TOOLTIP_LINK_LIMIT]:
            tooltip += f"<br>• {escape(name)}"
        if len(names) > TOOLTIP_LINK_LIMIT:
            tooltip += f"<br>... and {len(names) - TOOLTIP_LINK_LIMIT} more"
    elif address.entity_name:
        tooltip += f"<br><br>Linked to: {escape(address.entity_name)}"

    if address.case_uuids:
        tooltip += f"<br><br>From {len(address.case_uuids)} Court Case(s)"
    elif address.case_uuid:
        tooltip += "<br><br>From Court Case"
    return tooltip


def address_node(address, node_ids, catalog):
    """Address node, or None when none of its linked entities is on the graph."""
    if not any(entity_id in node_ids for entity_id in address.linked_ids):
        return None
    return _node(
        address.id,
        "address",
        wrap(address_label(address)),
        address_tooltip(address, catalog),
        "circle",
        node_color(ADDRESS_RULES, address),
        {"color": WHITE, "size": 10},
        20,
        10,
    )


# Bankruptcies

def bankruptcy_tooltip(bankruptcy):
    name = bankruptcy.name or ("Bankruptcy" if bankruptcy.is_bankrupt else "No Bankruptcy")
    tooltip = f"<b>{escape(name)}</b>"
    if bankruptcy.from_date:
        tooltip += f"<br>Start Date: {format_date(bankruptcy.from_date)}"
    if bankruptcy.extract_id:
        tooltip += f"<br>Extract ID: {escape(bankruptcy.extract_id)}"
    if bankruptcy.uuid:
        tooltip += f"<br>UUID: {escape(bankruptcy.uuid)}"
    return tooltip


def bankruptcy_node(bankruptcy):
    # The date lives in the tooltip and on the connecting edge
    return _node(
        bankruptcy.id,
        "bankruptcy",
        "",
        bankruptcy_tooltip(bankruptcy),
        "diamond",
        node_color(BANKRUPTCY_RULES, bankruptcy),
        {"color": WHITE, "size": 12, "bold": True},
        40,
        10,
    )
