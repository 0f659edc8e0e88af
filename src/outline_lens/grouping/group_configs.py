"""
Static group tables for Vue, React and generic documents.

Each table is built once at import time from plain module-level predicate
functions and is never mutated afterwards. Groups are evaluated by
descending priority; the first matching predicate claims the symbol.

    Vue (9):     components, composables, reactive, lifecycle, events,
                 watchers, methods, utils (catch-all), api
    React (8):   components, hooks, state, effects, callbacks, events,
                 utils (catch-all), api
    General (4): functions, classes, methods, variables (no catch-all)
"""

from types import MappingProxyType
from typing import Mapping

from outline_lens.core.models import (
    FrameworkType,
    FrontendSymbolKind,
    GroupConfig,
    GroupDefinition,
    OutlineKind,
    SymbolNode,
)

K = FrontendSymbolKind


def compare_by_name(a: SymbolNode, b: SymbolNode) -> int:
    """Order alphabetically by name, then by source line."""
    key_a = (a.name, a.start_line)
    key_b = (b.name, b.start_line)
    return (key_a > key_b) - (key_a < key_b)


def _is_event(symbol: SymbolNode) -> bool:
    return symbol.frontend_kind == K.EVENT_HANDLER or symbol.category == 'event'


# =============================================================================
# Vue predicates
# =============================================================================

def _vue_component(symbol: SymbolNode) -> bool:
    return symbol.frontend_kind == K.VUE_COMPONENT


def _vue_composable(symbol: SymbolNode) -> bool:
    return symbol.frontend_kind == K.VUE_COMPOSABLE or symbol.name.startswith('use')


def _vue_reactive(symbol: SymbolNode) -> bool:
    return symbol.frontend_kind in (K.VUE_REF, K.VUE_REACTIVE, K.VUE_COMPUTED)


def _vue_lifecycle(symbol: SymbolNode) -> bool:
    return symbol.frontend_kind == K.VUE_LIFECYCLE


def _vue_watcher(symbol: SymbolNode) -> bool:
    return symbol.frontend_kind == K.VUE_WATCH


def _vue_method(symbol: SymbolNode) -> bool:
    return (
        symbol.frontend_kind in (K.ARROW_FUNCTION, K.ASYNC_FUNCTION)
        and not symbol.name.startswith('use')
        and symbol.category != 'event'
    )


def _vue_utility(symbol: SymbolNode) -> bool:
    return symbol.category == 'utility' or 'utility' in symbol.tags


def _vue_api(symbol: SymbolNode) -> bool:
    return symbol.frontend_kind == K.API_CALL or symbol.category == 'api'


# =============================================================================
# React predicates
# =============================================================================

def _react_component(symbol: SymbolNode) -> bool:
    return symbol.frontend_kind == K.REACT_COMPONENT


def _react_hook(symbol: SymbolNode) -> bool:
    return symbol.frontend_kind in (K.REACT_HOOK, K.REACT_CUSTOM_HOOK)


def _react_state(symbol: SymbolNode) -> bool:
    return symbol.frontend_kind in (K.REACT_STATE, K.STATE_MANAGER)


def _react_effect(symbol: SymbolNode) -> bool:
    return symbol.frontend_kind == K.REACT_EFFECT


def _react_callback(symbol: SymbolNode) -> bool:
    return symbol.frontend_kind == K.REACT_CALLBACK


def _react_utility(symbol: SymbolNode) -> bool:
    return symbol.category == 'utility'


def _react_api(symbol: SymbolNode) -> bool:
    return symbol.frontend_kind == K.API_CALL


# =============================================================================
# General predicates
# =============================================================================

def _general_function(symbol: SymbolNode) -> bool:
    return (
        symbol.frontend_kind in (K.ARROW_FUNCTION, K.ASYNC_FUNCTION)
        or symbol.kind == OutlineKind.FUNCTION
    )


def _general_class(symbol: SymbolNode) -> bool:
    return symbol.kind == OutlineKind.CLASS


def _general_method(symbol: SymbolNode) -> bool:
    return symbol.kind == OutlineKind.METHOD


def _general_variable(symbol: SymbolNode) -> bool:
    return symbol.kind == OutlineKind.VARIABLE


VUE_GROUP_CONFIG = GroupConfig(
    framework=FrameworkType.VUE,
    groups=(
        GroupDefinition('vue-components', '组件定义', '🏗️', 'symbol-class', 'charts.green',
                        10, True, _vue_component, compare_by_name),
        GroupDefinition('vue-composables', '组合式函数', '🪝', 'symbol-event', 'charts.blue',
                        9, True, _vue_composable, compare_by_name),
        GroupDefinition('vue-reactive', '响应式数据', '⚡', 'symbol-variable', 'charts.yellow',
                        8, True, _vue_reactive),
        GroupDefinition('vue-lifecycle', '生命周期', '🔄', 'symbol-event', 'charts.orange',
                        7, True, _vue_lifecycle),
        GroupDefinition('vue-events', '事件处理', '🎯', 'symbol-method', 'charts.purple',
                        6, True, _is_event),
        GroupDefinition('vue-watchers', '监听器', '👀', 'eye', 'charts.red',
                        5, False, _vue_watcher),
        GroupDefinition('vue-methods', '方法函数', '⚙️', 'symbol-function', 'charts.blue',
                        4, False, _vue_method),
        GroupDefinition('vue-utils', '工具函数', '🔧', 'tools', 'foreground',
                        3, False, _vue_utility),
        GroupDefinition('vue-api', 'API 调用', '🌐', 'globe', 'charts.green',
                        2, False, _vue_api),
    ),
    catch_all_id='vue-utils',
)

REACT_GROUP_CONFIG = GroupConfig(
    framework=FrameworkType.REACT,
    groups=(
        GroupDefinition('react-components', 'React 组件', '⚛️', 'symbol-class', 'charts.blue',
                        10, True, _react_component, compare_by_name),
        GroupDefinition('react-hooks', 'Hooks', '🪝', 'symbol-event', 'charts.purple',
                        9, True, _react_hook),
        GroupDefinition('react-state', '状态管理', '📊', 'symbol-variable', 'charts.yellow',
                        8, True, _react_state),
        GroupDefinition('react-effects', '副作用', '🎭', 'symbol-event', 'charts.orange',
                        7, True, _react_effect),
        GroupDefinition('react-callbacks', '回调函数', '🔄', 'symbol-method', 'charts.green',
                        6, False, _react_callback),
        GroupDefinition('react-events', '事件处理', '🎯', 'symbol-method', 'charts.purple',
                        5, True, _is_event),
        GroupDefinition('react-utils', '工具函数', '🔧', 'tools', 'foreground',
                        4, False, _react_utility),
        GroupDefinition('react-api', 'API 调用', '🌐', 'globe', 'charts.green',
                        3, False, _react_api),
    ),
    catch_all_id='react-utils',
)

GENERAL_GROUP_CONFIG = GroupConfig(
    framework=FrameworkType.GENERAL,
    groups=(
        GroupDefinition('functions', '函数', '⚙️', 'symbol-function', 'charts.blue',
                        10, True, _general_function),
        GroupDefinition('classes', '类', '🏗️', 'symbol-class', 'charts.green',
                        9, True, _general_class),
        GroupDefinition('methods', '方法', '🔧', 'symbol-method', 'charts.purple',
                        8, False, _general_method),
        GroupDefinition('variables', '变量', '📦', 'symbol-variable', 'charts.yellow',
                        7, False, _general_variable),
    ),
)

DEFAULT_GROUP_CONFIGS: Mapping[FrameworkType, GroupConfig] = MappingProxyType({
    FrameworkType.VUE: VUE_GROUP_CONFIG,
    FrameworkType.REACT: REACT_GROUP_CONFIG,
    FrameworkType.GENERAL: GENERAL_GROUP_CONFIG,
})
