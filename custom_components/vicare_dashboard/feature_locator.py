"""Lookup of features in a categorized telemetry document.

Categories are searched in a fixed order and the first match wins. A
feature that is present but carries a null value is treated exactly like a
missing key: the search simply continues.
"""

from __future__ import annotations

from collections.abc import Sequence

from .constants import CATEGORY_SEARCH_ORDER, FeatureCategory
from .models import Feature, ObjectFeature, RawFeature, TelemetryDocument


def _as_list(names: str | Sequence[str] | None) -> list[str]:
    if not names:
        return []
    if isinstance(names, str):
        return [names]
    return list(names)


def resolve_feature(feature: Feature) -> Feature | None:
    """Reduce a located feature to the feature callers should see.

    Objects that wrap one real measurement under ``value`` resolve to that
    child; a child without a unit inherits the parent's unit. Objects
    without such a child are returned whole (statistics and other
    compounds). A null ``value`` child yields the whole object when another
    child is populated, None otherwise. Scalars resolve to themselves
    unless their value is null.
    """
    if isinstance(feature, ObjectFeature):
        child = feature.child("value")
        if child is None:
            return feature
        if isinstance(child, ObjectFeature):
            return child
        if child.value is None:
            # Null measurement; other populated children keep the compound
            others = (other for name, other in feature.value.items() if name != "value")
            return feature if any(other.value is not None for other in others) else None
        if child.unit is None and feature.unit is not None:
            return child.model_copy(update={"unit": feature.unit})
        return child

    if feature.value is None:
        return None
    return feature


def find(
    document: TelemetryDocument,
    candidates: str | Sequence[str],
    patterns: str | Sequence[str] | None = None,
    order: tuple[FeatureCategory, ...] = CATEGORY_SEARCH_ORDER,
) -> Feature | None:
    """Find the first present value among candidate keys.

    Each candidate is looked up in every category, in order. If no
    candidate resolves, fallback patterns are matched case-insensitively
    as substrings of all keys, in document order.

    Args:
        document: Telemetry document to search.
        candidates: Exact dotted feature names, most preferred first.
        patterns: Optional substrings used when no candidate matched.
        order: Category search order.

    Returns:
        The resolved feature, or None when nothing matched.
    """
    for name in _as_list(candidates):
        for category in document.iter_categories(order):
            feature = category.get(name)
            if feature is None:
                continue
            resolved = resolve_feature(feature)
            if resolved is not None:
                return resolved

    for pattern in _as_list(patterns):
        needle = pattern.lower()
        for category in document.iter_categories(order):
            for key, feature in category.items():
                if needle in key.lower() and feature.value is not None:
                    return feature

    return None


def find_nested(
    document: TelemetryDocument,
    name: str,
    prop: str,
    order: tuple[FeatureCategory, ...] = CATEGORY_SEARCH_ORDER,
) -> Feature | None:
    """Return one named sub-property of a compound feature.

    Example:
        >>> find_nested(doc, "heating.circuits.0.heating.curve", "slope").value
        1.4
    """
    for category in document.iter_categories(order):
        feature = category.get(name)
        if not isinstance(feature, ObjectFeature):
            continue
        nested = feature.child(prop)
        if nested is not None and nested.value is not None:
            return nested
    return None


def find_raw(document: TelemetryDocument, name: str) -> RawFeature | None:
    """Exact-name lookup in the flat raw feature list."""
    for raw in document.raw_features:
        if raw.feature == name:
            return raw
    return None


def feature_exists(
    document: TelemetryDocument,
    name: str,
    categories: tuple[FeatureCategory, ...] = CATEGORY_SEARCH_ORDER,
    include_raw: bool = True,
) -> bool:
    """Report whether a key is present at all, regardless of its value."""
    if any(name in category for category in document.iter_categories(categories)):
        return True
    return include_raw and find_raw(document, name) is not None
