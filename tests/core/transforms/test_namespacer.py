import pytest

pytest.importorskip("lxml")

from svgtextbox_toolkit.core.exceptions import InvalidNumberError, MissingDirectiveError, TransformError
from svgtextbox_toolkit.core.transforms.namespacer import FragmentNamespacer, namespace_fragment
from svgtextbox_toolkit.core.utils import serialize_document

SVG = "{http://www.w3.org/2000/svg}"
XLINK_HREF = "{http://www.w3.org/1999/xlink}href"


def _first(tree, local):
    return next(tree.getroot().iter(f"{SVG}{local}"))


class TestDirectivesFromDocument:
    """The fragment carries its own directives as processing instructions."""

    def test_all_rules(self, fragment_tree):
        result = namespace_fragment(fragment_tree)
        root = result.getroot()

        symbol = _first(result, "symbol")
        assert symbol.get("id") == "textbox-0-glyph0-1"

        use = _first(result, "use")
        assert use.get(XLINK_HREF) == "#textbox-0-lyph0-1"
        assert use.get("x") == "10"
        assert use.get("y") == "20"
        assert use.get("transform") == "translate(10,20)"

        groups = {g.get("id") for g in root.iter(f"{SVG}g")}
        assert groups == {None, "textbox-0-surface", "other"}

    def test_root_size_untouched(self, fragment_tree):
        root = namespace_fragment(fragment_tree).getroot()
        assert root.get("width") == "100"
        assert root.get("transform") is None

    def test_input_untouched(self, fragment_tree):
        before = serialize_document(fragment_tree)
        namespace_fragment(fragment_tree)
        assert serialize_document(fragment_tree) == before

    def test_directives_are_kept_in_output(self, fragment_tree):
        result = namespace_fragment(fragment_tree)
        assert result.xpath("//processing-instruction('svgtextbox-prefix')")


class TestExplicitDirectives:

    def test_cross_reference_drops_kind_character(self, make_tree):
        tree = make_tree("<use href='#Xabc'/>")
        assert _first(namespace_fragment(tree, prefix="p1"), "use").get("href") == "#p1-abc"

    def test_xlink_reference(self, make_tree):
        tree = make_tree("<use xlink:href='#Xabc'/>")
        assert _first(namespace_fragment(tree, prefix="p1"), "use").get(XLINK_HREF) == "#p1-abc"

    def test_symbol_id(self, make_tree):
        tree = make_tree("<symbol id='icon1'/>")
        assert _first(namespace_fragment(tree, prefix="p1"), "symbol").get("id") == "p1-icon1"

    def test_surface_group_collapses_suffix(self, make_tree):
        tree = make_tree("<g id='surface-main'/>")
        assert _first(namespace_fragment(tree, prefix="p1"), "g").get("id") == "p1-surface"

    def test_other_ids_untouched(self, make_tree):
        tree = make_tree("<g id='layer'/><rect id='surface1'/>")
        result = namespace_fragment(tree, prefix="p1")
        assert _first(result, "g").get("id") == "layer"
        assert _first(result, "rect").get("id") == "surface1"

    def test_external_references_untouched(self, make_tree):
        tree = make_tree("<a href='http://example.com/#x'/><image xlink:href='data:image/png;base64,AA'/>")
        result = namespace_fragment(tree, prefix="p1")
        assert _first(result, "a").get("href") == "http://example.com/#x"
        assert _first(result, "image").get(XLINK_HREF) == "data:image/png;base64,AA"

    def test_offsets_are_trimmed(self, make_tree):
        tree = make_tree("<rect x='3' y='4'/>")
        rect = _first(namespace_fragment(tree, x_offset="10", y_offset=" 20 "), "rect")
        assert rect.get("transform") == "translate(10,20)"
        assert rect.get("x") == "3"

    def test_existing_transform_is_overwritten(self, make_tree):
        tree = make_tree("<rect x='3' transform='scale(2)'/>")
        rect = _first(namespace_fragment(tree, x_offset="1.50", y_offset="-2"), "rect")
        assert rect.get("transform") == "translate(1.5,-2)"

    def test_numeric_offsets(self, make_tree):
        tree = make_tree("<text x='0'>t</text>")
        text = _first(namespace_fragment(tree, x_offset=5, y_offset=7.0), "text")
        assert text.get("transform") == "translate(5,7)"

    def test_explicit_prefix_wins_over_document(self, make_tree):
        tree = make_tree("<?svgtextbox-prefix doc?><symbol id='s'/>")
        assert _first(namespace_fragment(tree, prefix="arg"), "symbol").get("id") == "arg-s"

    def test_document_fills_in_missing_arguments(self, make_tree):
        tree = make_tree("<?svgtextbox-y_offset 9?><rect x='1'/>")
        rect = _first(namespace_fragment(tree, x_offset="4"), "rect")
        assert rect.get("transform") == "translate(4,9)"


class TestErrors:

    def test_missing_offsets(self, make_tree):
        tree = make_tree("<rect x='1'/>")
        with pytest.raises(MissingDirectiveError) as excinfo:
            namespace_fragment(tree, prefix="p1")
        assert excinfo.value.directive == "svgtextbox-x_offset"

    def test_missing_y_offset(self, make_tree):
        tree = make_tree("<rect x='1'/>")
        with pytest.raises(MissingDirectiveError) as excinfo:
            namespace_fragment(tree, x_offset="1")
        assert excinfo.value.directive == "svgtextbox-y_offset"

    def test_missing_prefix(self, make_tree):
        tree = make_tree("<use href='#Xabc'/>")
        with pytest.raises(MissingDirectiveError) as excinfo:
            namespace_fragment(tree)
        assert excinfo.value.directive == "svgtextbox-prefix"
        assert isinstance(excinfo.value, TransformError)

    @pytest.mark.parametrize("value", ["ten", "1e3", "", "١٠"])
    def test_invalid_number(self, make_tree, value):
        tree = make_tree("<rect x='1'/>")
        with pytest.raises(InvalidNumberError) as excinfo:
            namespace_fragment(tree, x_offset=value, y_offset="2")
        assert excinfo.value.value == value

    def test_invalid_number_from_document(self, make_tree):
        tree = make_tree("<?svgtextbox-x_offset abc?><?svgtextbox-y_offset 1?><rect x='1'/>")
        with pytest.raises(InvalidNumberError):
            namespace_fragment(tree)

    def test_no_rule_fires_without_directives(self, make_tree):
        tree = make_tree("<g id='layer'><rect width='2'/></g>")
        result = namespace_fragment(tree)
        assert serialize_document(result) == serialize_document(tree)

    def test_error_leaves_input_untouched(self, make_tree):
        tree = make_tree("<symbol id='s'/><rect x='1'/>")
        before = serialize_document(tree)
        with pytest.raises(MissingDirectiveError):
            namespace_fragment(tree, prefix="p1")
        assert serialize_document(tree) == before


def test_namespacer_resolves_directives_per_run(make_tree):
    namespacer = FragmentNamespacer()
    first = namespacer.transform(make_tree("<?svgtextbox-prefix a?><symbol id='s'/>"))
    second = namespacer.transform(make_tree("<?svgtextbox-prefix b?><symbol id='s'/>"))
    assert _first(first, "symbol").get("id") == "a-s"
    assert _first(second, "symbol").get("id") == "b-s"


def test_root_element_sees_top_level_directives():
    from svgtextbox_toolkit.core.utils import parse_document

    tree = parse_document(
        b"<?svgtextbox-prefix p?><?svgtextbox-x_offset 3?><?svgtextbox-y_offset 4?>"
        b"<svg xmlns='http://www.w3.org/2000/svg'><symbol id='s'/><rect x='1'/></svg>"
    )
    root = namespace_fragment(tree.getroot())
    assert root.tag == f"{SVG}svg"
    assert next(root.iter(f"{SVG}symbol")).get("id") == "p-s"
    assert next(root.iter(f"{SVG}rect")).get("transform") == "translate(3,4)"
