"""
Node and edge styling rules.

Each category's colour is picked from an ordered table of
(predicate, style name) pairs. The first matching predicate wins, so the
table order is the priority order.
"""

# Node palettes (background / border)
COLORS = {
    "company": {"background": "#3b82f6", "border": "#2563eb"},
    "company_good": {"background": "#60a5fa", "border": "#3b82f6"},
    "company_alert": {"background": "#ef4444", "border": "#dc2626"},
    "ceased_company": {"background": "#94a3b8", "border": "#64748b"},
    "person": {"background": "#fbbf24", "border": "#f59e0b"},
    "ceased_person": {"background": "#94a3b8", "border": "#64748b"},
    "shareholder": {"background": "#34d399", "border": "#10b981"},
    "address": {"background": "#fb923c", "border": "#f97316"},
    "ceased_address": {"background": "#94a3b8", "border": "#64748b"},
    "bankruptcy": {"background": "#dc2626", "border": "#991b1b"},
    "no_bankruptcy": {"background": "#10b981", "border": "#059669"},
    "ato_zero": {"background": "#4FC3F7", "border": "#4FC3F7"},
    "ato_debt": {"background": "#ef4444", "border": "#dc2626"},
    "court_case": {"background": "#a78bfa", "border": "#8b5cf6"},
}

# Edge palettes (line / highlight)
EDGE_COLORS = {
    "ppsr": {"color": "#a78bfa", "highlight": "#8b5cf6"},
    "bankruptcy": {"color": "#dc2626", "highlight": "#991b1b"},
    "former": {"color": "#94a3b8", "highlight": "#64748b"},
    "current": {"color": "#60a5fa", "highlight": "#3b82f6"},
    "ato_zero": {"color": "#4FC3F7", "highlight": "#4FC3F7"},
    "ato_debt": {"color": "#ef4444", "highlight": "#dc2626"},
    "court_case": {"color": "#a78bfa", "highlight": "#8b5cf6"},
}

PPSR_TYPES = ("ppsr_security", "ppsr_director")
FORMER_MARKERS = ("former", "ceased", "past")

DOTTED = [2, 6]
DASHED = True
SOLID = False


def first_match(rules, subject):
    """Return the style of the first rule whose predicate accepts subject."""
    for predicate, style in rules:
        if predicate(subject):
            return style
    raise LookupError(f"No style rule matched {subject!r}")


def is_former(text):
    text = (text or "").lower()
    return any(marker in text for marker in FORMER_MARKERS)


def _always(_):
    return True


# Companies

def _company_has_alert(company):
    return bool(company.court_cases) or (
        company.ato_data is not None and company.ato_data.has_debt
    )


def _company_debt_free(company):
    return company.ato_data is not None and company.ato_data.is_zero


def _company_ceased(company):
    return "ceased" in (company.status or "").lower()


COMPANY_RULES = (
    (_company_has_alert, "company_alert"),
    (_company_debt_free, "company_good"),
    (_company_ceased, "ceased_company"),
    (_always, "company"),
)

ATO_RULES = (
    (lambda ato: (ato.amount or 0) == 0, "ato_zero"),
    (_always, "ato_debt"),
)

PERSON_RULES = (
    (lambda person: any(role.is_ceased for role in person.roles), "ceased_person"),
    (_always, "person"),
)

ADDRESS_RULES = (
    (lambda address: address.is_ceased, "ceased_address"),
    (_always, "address"),
)

BANKRUPTCY_RULES = (
    (lambda bankruptcy: bankruptcy.is_bankrupt, "bankruptcy"),
    (_always, "no_bankruptcy"),
)

# Relationships: subject is the Relationship record

EDGE_COLOR_RULES = (
    (lambda rel: rel.type.lower() in PPSR_TYPES, "ppsr"),
    (lambda rel: rel.type.lower() == "bankruptcy", "bankruptcy"),
    (lambda rel: is_former(rel.type) or is_former(rel.label), "former"),
    (_always, "current"),
)

EDGE_DASH_RULES = (
    (lambda rel: bool(rel.uncertain), DOTTED),
    (lambda rel: is_former(rel.type), DASHED),
    (_always, SOLID),
)


def node_color(rules, subject):
    return dict(COLORS[first_match(rules, subject)])


def edge_color(rules, subject):
    return dict(EDGE_COLORS[first_match(rules, subject)])
