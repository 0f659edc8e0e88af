"""
GroupEngine - partitions enriched symbols into named, ordered buckets.

Grouping operates on the flat top-level symbol list (children travel with
their parent and are not grouped on their own). Every symbol lands in at
most one bucket:

    1. Groups are evaluated by descending priority; first match wins
    2. Unclaimed symbols go to the config's catch-all group, if any,
       otherwise they are left out of the grouped output
    3. Each bucket is sorted by its comparator, or by priority desc,
       source line asc, name asc
    4. Empty buckets are removed; bucket order follows group priority
"""

import logging
from functools import cmp_to_key
from typing import Dict, List, Mapping, Optional, Sequence

from outline_lens.core.models import FrameworkType, GroupConfig, SymbolNode
from outline_lens.grouping.group_configs import DEFAULT_GROUP_CONFIGS

logger = logging.getLogger(__name__)


def default_sort_key(symbol: SymbolNode):
    """Priority descending, then source line ascending, then name."""
    return (-int(symbol.priority), symbol.start_line, symbol.name)


class GroupEngine:
    """
    Rule-table driven symbol grouping.

    Args:
        configs: Framework -> GroupConfig registry. Defaults to the static
            Vue/React/General tables. Must contain a GENERAL entry, which is
            the fallback for frameworks without a table of their own.
    """

    def __init__(self, configs: Optional[Mapping[FrameworkType, GroupConfig]] = None):
        self._configs = dict(configs if configs is not None else DEFAULT_GROUP_CONFIGS)
        if FrameworkType.GENERAL not in self._configs:
            raise ValueError("Group configs must include a GENERAL fallback")

    def get_group_config(self, framework: FrameworkType) -> GroupConfig:
        """
        Resolve the group table for a framework.

        Args:
            framework: Detected framework

        Returns:
            The framework's GroupConfig, or the GENERAL one if absent
        """
        return self._configs.get(framework) or self._configs[FrameworkType.GENERAL]

    def group_symbols(
        self,
        symbols: Sequence[SymbolNode],
        framework: FrameworkType,
    ) -> Dict[str, List[SymbolNode]]:
        """
        Partition symbols into buckets.

        Args:
            symbols: Top-level enriched symbols
            framework: Framework whose group table applies

        Returns:
            Ordered mapping group id -> sorted, non-empty symbol list, in
            descending group priority
        """
        config = self.get_group_config(framework)
        ordered_groups = config.ordered_groups
        buckets: Dict[str, List[SymbolNode]] = {group.id: [] for group in ordered_groups}

        dropped = 0
        for symbol in symbols:
            for group in ordered_groups:
                if group.predicate(symbol):
                    buckets[group.id].append(symbol)
                    break
            else:
                if config.catch_all_id is not None:
                    buckets[config.catch_all_id].append(symbol)
                else:
                    dropped += 1

        if dropped:
            logger.debug(
                f"{dropped} symbol(s) matched no {config.framework.value} group "
                f"and have no catch-all"
            )

        result: Dict[str, List[SymbolNode]] = {}
        for group in ordered_groups:
            members = buckets[group.id]
            if not members:
                continue
            if group.comparator is not None:
                members.sort(key=cmp_to_key(group.comparator))
            else:
                members.sort(key=default_sort_key)
            result[group.id] = members

        return result
