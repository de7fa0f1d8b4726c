"""Central name sets for the query-key rules, plus rule metadata.

Supporting a new TanStack Query API = new set entries, no walker changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SiteKind(str, Enum):
    CLIENT_METHOD = "client_method"  # queryClient.setQueryData(key, ...)
    HOOK = "hook"                    # useQuery(key, ...) / useQuery({ queryKey })


# QueryClient methods whose first argument is a query key (or filters object)
TRACKED_CLIENT_METHODS: frozenset[str] = frozenset({
    "setQueryData",
    "getQueryData",
    "getQueryState",
    "setQueriesData",
    "getQueriesData",
    "invalidateQueries",
    "refetchQueries",
    "removeQueries",
    "resetQueries",
    "cancelQueries",
    "isFetching",
    "prefetchQuery",
    "prefetchInfiniteQuery",
    "fetchQuery",
    "fetchInfiniteQuery",
    "ensureQueryData",
    "ensureInfiniteQueryData",
    "setQueryDefaults",
    "getQueryDefaults",
})

# Hooks whose first argument is a key (v3/v4 positional form) or an options object
TRACKED_HOOKS: frozenset[str] = frozenset({
    "useQuery",
    "useInfiniteQuery",
    "useSuspenseQuery",
    "useSuspenseInfiniteQuery",
    "usePrefetchQuery",
    "usePrefetchInfiniteQuery",
    "useMutation",
    "useIsFetching",
    "useIsMutating",
})

# Object property names that carry a key
KEY_PROPERTY_NAMES: frozenset[str] = frozenset({"queryKey", "mutationKey"})


@dataclass(frozen=True)
class RuleMeta:
    name: str
    type: str            # "problem" | "suggestion" | "layout"
    description: str
    message_id: str
    message: str


NO_PLAIN_QUERY_KEYS = RuleMeta(
    name="no-plain-query-keys",
    type="suggestion",
    description="Enforce using query key factories instead of raw arrays or strings",
    message_id="noRawQueryKeys",
    message="Avoid using raw arrays or strings for query keys. Use query key factories instead.",
)

RULES: dict[str, RuleMeta] = {
    NO_PLAIN_QUERY_KEYS.name: NO_PLAIN_QUERY_KEYS,
}


def lookup_site_kind(name: str, *, is_member_call: bool) -> SiteKind | None:
    """Return the site kind for a called name, or None if it is not tracked."""
    if is_member_call:
        return SiteKind.CLIENT_METHOD if name in TRACKED_CLIENT_METHODS else None
    return SiteKind.HOOK if name in TRACKED_HOOKS else None
