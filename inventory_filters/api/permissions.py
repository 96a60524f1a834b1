"""Public API for deriving security filters from authorization policies.

A security filter tells the search layer which objects of a resource a subject
may see. It is inferred from Casbin policies: a policy on ``<resource>^*`` grants
or denies every object, a policy on ``<resource>^<uuid>`` a single one.
"""

import logging
from typing import Optional

from inventory_filters.api.data import (
    WILDCARD_OBJECT,
    ActionData,
    ObjectData,
    SecurityFilter,
    SubjectData,
    UserData,
)
from inventory_filters.engine.enforcer import AuthzEnforcer

logger = logging.getLogger(__name__)

__all__ = ["get_security_filter", "get_object_policies"]

ALLOW = "allow"
DENY = "deny"


def _as_user(subject) -> SubjectData:
    return subject if isinstance(subject, SubjectData) else UserData(external_key=subject)


def _as_action(action) -> ActionData:
    return action if isinstance(action, ActionData) else ActionData(external_key=action)


def get_object_policies(subject: SubjectData, action: ActionData, resource: str, enforcer=None) -> tuple[set, set]:
    """Collect the objects a subject is explicitly allowed or denied to act on.

    Policies of every role the subject holds, directly or transitively, are included.

    Args:
        subject: The subject (e.g., UserData(external_key="alice")).
        action: The action (e.g., ActionData(external_key="list")).
        resource: Resource whose objects to collect (e.g., 'certificate').
        enforcer: Enforcer to query. Defaults to the database-backed enforcer.

    Returns:
        tuple: The sets of allowed and denied object ids.
    """
    enforcer = enforcer or AuthzEnforcer.get_enforcer()
    subjects = [subject.namespaced_key, *enforcer.get_implicit_roles_for_user(subject.namespaced_key)]

    prefix = f"{resource}{ObjectData.SEPARATOR}"
    allowed, denied = set(), set()
    for policy_subject in subjects:
        for policy in enforcer.get_filtered_policy(0, policy_subject, action.namespaced_key):
            if not policy[2].startswith(prefix):
                continue
            obj = ObjectData(namespaced_key=policy[2], resource=resource)
            if obj.is_wildcard or not obj.object_id:
                continue
            effect = policy[3] if len(policy) > 3 else ALLOW
            (denied if effect == DENY else allowed).add(obj.object_id)
    return allowed, denied


def get_security_filter(
    subject,
    action,
    resource: str,
    parent_link: Optional[str] = None,
    enforcer=None,
) -> SecurityFilter:
    """Decide which objects of a resource a subject may act on.

    If the subject may act on ``<resource>^*`` every object is visible except the
    explicitly denied ones. Otherwise only explicitly allowed objects are visible,
    and only those the enforcer itself allows, so a deny on ``<resource>^*`` hides
    every object. A deny always wins over an allow.

    Args:
        subject: Username or SubjectData.
        action: Action name (e.g., 'list') or ActionData.
        resource: Resource name (e.g., 'certificate').
        parent_link: Relation whose target's id is checked instead of the object's
            own (e.g., 'key' for key items).
        enforcer: Enforcer to query. Defaults to the database-backed enforcer.

    Returns:
        SecurityFilter: The authorization decision.
    """
    enforcer = enforcer or AuthzEnforcer.get_enforcer()
    subject = _as_user(subject)
    action = _as_action(action)

    wildcard = ObjectData(external_key=WILDCARD_OBJECT, resource=resource)
    restricted = not enforcer.enforce(subject.namespaced_key, action.namespaced_key, wildcard.namespaced_key)
    allowed, denied = get_object_policies(subject, action, resource, enforcer=enforcer)
    allowed = {
        object_id
        for object_id in allowed - denied
        if enforcer.enforce(
            subject.namespaced_key,
            action.namespaced_key,
            ObjectData(external_key=object_id, resource=resource).namespaced_key,
        )
    }

    security_filter = SecurityFilter(
        allowed_ids=allowed,
        denied_ids=denied,
        restricted=restricted,
        parent_link=parent_link,
    )
    logger.debug(f"Security filter for {subject} to {action} {resource}: {security_filter}")
    return security_filter
