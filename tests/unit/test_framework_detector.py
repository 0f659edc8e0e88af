"""Unit tests for framework detection."""
import pytest
from outline_lens.analysis.framework_detector import detect_framework
from outline_lens.core.models import FrameworkType


class TestExtension:
    """Extension evidence always wins."""

    def test_vue_extension(self):
        assert detect_framework("Counter.vue", "") == FrameworkType.VUE

    @pytest.mark.parametrize("name", ["App.jsx", "App.tsx", "/src/PAGE.TSX"])
    def test_react_extensions(self, name):
        assert detect_framework(name, "") == FrameworkType.REACT

    def test_extension_outranks_imports(self):
        text = "import { ref } from 'vue'\n"
        assert detect_framework("Widget.tsx", text) == FrameworkType.REACT


class TestImports:

    def test_vue_import(self):
        assert detect_framework("store.js", "import { ref } from 'vue'") == FrameworkType.VUE

    def test_scoped_vue_import(self):
        text = "import { mount } from '@vue/test-utils'"
        assert detect_framework("counter.test.ts", text) == FrameworkType.VUE

    def test_react_import(self):
        text = "import React from 'react'\nexport const x = 1"
        assert detect_framework("hooks.js", text) == FrameworkType.REACT

    def test_vue_marker_checked_first_on_a_line(self):
        text = "import { bridge } from 'vue-react-bridge'"
        assert detect_framework("bridge.js", text) == FrameworkType.VUE

    def test_first_import_line_decides(self):
        text = "import React from 'react'\nimport { ref } from 'vue'"
        assert detect_framework("mixed.js", text) == FrameworkType.REACT

    def test_non_import_lines_are_ignored(self):
        text = "// uses vue internally\nconst x = 1"
        assert detect_framework("util.js", text) == FrameworkType.GENERAL


class TestContent:

    def test_define_component(self):
        text = "export default defineComponent({})"
        assert detect_framework("comp.ts", text) == FrameworkType.VUE

    def test_react_hooks(self):
        text = "const [a, setA] = useState(0)"
        assert detect_framework("widget.js", text) == FrameworkType.REACT

    def test_react_namespace(self):
        text = "export default () => React.createElement('div')"
        assert detect_framework("el.js", text) == FrameworkType.REACT


class TestTotality:

    def test_plain_file_is_general(self):
        assert detect_framework("util.js", "export const x = 1") == FrameworkType.GENERAL

    @pytest.mark.parametrize("name,text", [
        (None, None),
        ("", ""),
        ("noext", None),
        (None, "import x from 'y'"),
    ])
    def test_never_raises(self, name, text):
        assert detect_framework(name, text) in (
            FrameworkType.VUE,
            FrameworkType.REACT,
            FrameworkType.GENERAL,
        )
