# apps/moderation/services/targets.py

from typing import Callable, Dict, Optional

from django.apps import apps as django_apps

from apps.moderation.constants.targets import TARGET_MODEL_MAP, TARGET_CONTENT, TARGET_ACCOUNT
from apps.moderation.exceptions import InvalidTarget

# Resolver signature: given target obj -> owning user id (or None)
OwnerResolver = Callable[[object], Optional[int]]

# Registry by target type
_OWNER_RESOLVERS: Dict[str, OwnerResolver] = {}


def register_owner_resolver(target_type: str, resolver: OwnerResolver):
    """
    Register how to find the owning account of a target type.
    Example: register_owner_resolver("content", lambda post: post.author_id)
    """
    _OWNER_RESOLVERS[target_type] = resolver


def get_target_model(target_type: str):
    label = TARGET_MODEL_MAP.get(target_type)
    if not label:
        raise InvalidTarget(f"Unknown target type '{target_type}'.")
    return django_apps.get_model(label)


def resolve_target(target_type: str, target_id, *, lock: bool = False):
    """
    Load the target row. With lock=True the row is locked (select_for_update);
    callers must already be inside transaction.atomic().
    """
    model = get_target_model(target_type)
    try:
        pk = int(target_id)
    except (TypeError, ValueError):
        raise InvalidTarget("Invalid target id.")

    qs = model.objects.select_for_update() if lock else model.objects.all()
    obj = qs.filter(pk=pk).first()
    if obj is None:
        raise InvalidTarget("Target not found.")
    return obj


def get_owner_id(target_type: str, target_obj) -> Optional[int]:
    if target_obj is None:
        return None
    resolver = _OWNER_RESOLVERS.get(target_type)
    if resolver is None:
        raise InvalidTarget(f"No owner resolver for '{target_type}'.")
    return resolver(target_obj)


def get_owner(target_type: str, target_obj):
    owner_id = get_owner_id(target_type, target_obj)
    if owner_id is None:
        return None
    if target_type == TARGET_ACCOUNT:
        return target_obj
    return django_apps.get_model(TARGET_MODEL_MAP[TARGET_ACCOUNT]).objects.filter(pk=owner_id).first()


# -------------------------------------------------------------------
# Default resolvers. Called from ModerationConfig.ready().
# -------------------------------------------------------------------

def register_default_resolvers():
    register_owner_resolver(TARGET_CONTENT, lambda post: post.author_id)
    register_owner_resolver(TARGET_ACCOUNT, lambda account: account.pk)
