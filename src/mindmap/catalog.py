"""
Entity catalogue for one matter.

Normalizes the fetched payload into per-category entity lists addressable
by id. Older payloads that list directors, secretaries and office holders
separately are folded into persons.
"""

import logging
from typing import Optional

from .formatting import parse_date
from .models import Bankruptcy, MindMapData, Person, PersonRole

logger = logging.getLogger(__name__)

CATEGORIES = ("companies", "persons", "shareholders", "addresses", "bankruptcies")

# Legacy list name -> role type
LEGACY_ROLE_LISTS = {
    "directors": "director",
    "office_holders": "officeholder",
    "secretaries": "secretary",
}


def normalize_name(name):
    return " ".join(str(name or "").lower().split())


def normalize_dob(dob):
    parsed = parse_date(dob)
    return parsed.isoformat() if parsed else ""


def person_key(name, dob):
    """Identity of a person across role lists: name, plus DOB when known."""
    name_key = normalize_name(name)
    dob_key = normalize_dob(dob)
    return f"{name_key}|{dob_key}" if dob_key else name_key


def _existing_key(persons, name, dob):
    key = person_key(name, dob)
    if key in persons or normalize_dob(dob):
        return key
    # Without a DOB, join anyone with the same name
    name_key = normalize_name(name)
    for existing in persons:
        if existing == name_key or existing.startswith(name_key + "|"):
            return existing
    return key


def merge_legacy_persons(entities):
    """Fold legacy director/office holder/secretary lists into Person records.

    Records with the same normalized name and DOB are one person; a record
    without a DOB joins an existing person of the same name. Returns the
    persons and a map from every legacy id to its person's id.
    """
    persons = {}
    id_map = {}
    for list_name, role_type in LEGACY_ROLE_LISTS.items():
        for raw in getattr(entities, list_name):
            raw_id = raw.get("id")
            if raw_id is None:
                continue
            raw_id = str(raw_id)
            name = raw.get("name") or ""
            dob = raw.get("dob")
            if normalize_name(name):
                key = _existing_key(persons, name, dob)
            else:
                key = f"id:{raw_id}"

            role = PersonRole(
                type=role_type,
                original_type=raw.get("originalType") or raw.get("type"),
                role=raw.get("role"),
            )
            person = persons.get(key)
            if person is None:
                person = persons[key] = Person(id=raw_id, name=name, dob=dob, roles=[])
            elif not person.dob and dob:
                person.dob = dob
            person.roles.append(role)
            id_map.setdefault(raw_id, person.id)
    return list(persons.values()), id_map


def _remap_relationship(rel, id_map):
    source = id_map.get(rel.source, rel.source)
    target = id_map.get(rel.target, rel.target)
    if (source, target) == (rel.source, rel.target):
        return rel
    return rel.model_copy(update={"source": source, "target": target})


def _remap_address(address, id_map):
    if not any(entity_id in id_map for entity_id in address.linked_ids):
        return address
    linked = []
    for entity_id in address.linked_ids:
        entity_id = id_map.get(entity_id, entity_id)
        if entity_id not in linked:
            linked.append(entity_id)
    return address.model_copy(update={"linked_entity_ids": linked})


class EntityCatalog:
    """Category-tagged entities of one matter, addressable by id."""

    def __init__(self, data: MindMapData):
        entities = data.entities
        persons = entities.persons
        addresses = entities.addresses
        relationships = data.relationships
        if persons is None:
            persons, id_map = merge_legacy_persons(entities)
            relationships = [_remap_relationship(rel, id_map) for rel in relationships]
            addresses = [_remap_address(address, id_map) for address in addresses]

        self.relationships = list(relationships)
        self.stats = data.stats
        self._by_id = {}
        self._category_of = {}
        self._lists = {}

        raw_lists = {
            "companies": entities.companies,
            "persons": persons,
            "shareholders": entities.shareholders,
            "addresses": addresses,
            "bankruptcies": entities.bankruptcies,
        }
        for category in CATEGORIES:
            kept = []
            for entity in raw_lists[category]:
                if entity.id in self._by_id:
                    logger.warning(
                        "Dropping duplicate entity id %s in %s (already in %s)",
                        entity.id, category, self._category_of[entity.id],
                    )
                    continue
                self._by_id[entity.id] = entity
                self._category_of[entity.id] = category
                kept.append(entity)
            self._lists[category] = kept

        logger.debug(
            "Catalog: %s",
            ", ".join(f"{c}={len(self._lists[c])}" for c in CATEGORIES),
        )

    @classmethod
    def from_payload(cls, payload) -> "EntityCatalog":
        """Build a catalog from the raw `data` object of a mind-map response."""
        if isinstance(payload, MindMapData):
            return cls(payload)
        return cls(MindMapData.model_validate(payload))

    def __len__(self):
        return len(self._by_id)

    def __contains__(self, entity_id):
        return entity_id in self._by_id

    def category(self, name):
        return self._lists[name]

    @property
    def companies(self):
        return self._lists["companies"]

    @property
    def persons(self):
        return self._lists["persons"]

    @property
    def shareholders(self):
        return self._lists["shareholders"]

    @property
    def addresses(self):
        return self._lists["addresses"]

    @property
    def bankruptcies(self):
        return self._lists["bankruptcies"]

    def get(self, entity_id):
        return self._by_id.get(entity_id)

    def category_of(self, entity_id) -> Optional[str]:
        return self._category_of.get(entity_id)

    def name_of(self, entity_id) -> Optional[str]:
        """Display name of a company, person or shareholder; None otherwise."""
        if self._category_of.get(entity_id) not in ("companies", "persons", "shareholders"):
            return None
        return self._by_id[entity_id].name or None

    def bankruptcy(self, entity_id) -> Optional[Bankruptcy]:
        if self._category_of.get(entity_id) != "bankruptcies":
            return None
        return self._by_id[entity_id]
