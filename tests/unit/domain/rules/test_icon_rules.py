"""Unit tests for the icon rules: single svg, currentColor, memoized export, svg props type."""

from tests.estree_builders import (
    Src,
    arrow,
    block,
    const,
    default_spec,
    export_default,
    expr_stmt,
    function_decl,
    ident,
    import_decl,
    jsx,
    jsx_attr,
    literal,
    namespace_spec,
    named_spec,
    node,
    program,
    ret,
)
from vertex_lint.domain.rules.icon_rules import (
    MemoizedExportDetector,
    SingleSvgPerFileDetector,
    SvgCurrentColorDetector,
    SvgPropsTypeDetector,
)
from vertex_lint.use_cases.apply_fixes import FixApplier
from vertex_lint.use_cases.lint_file import LintEngine


def _icon_const(src: Src, tag: str = "svg", params: list[dict] | None = None,
                arrow_start: str = "(") -> dict:
    """``const Icon = (...) => <tag />;`` located in src."""
    element = f"<{tag} />"
    fn = arrow(params or [], jsx(tag, rng=src.span(element)),
               [src.at(arrow_start, src.at("=")), src.span(element)[1]])
    return const(ident("Icon", src.span("Icon")), fn,
                 [src.at("const"), src.span(element)[1] + 1],
                 [src.at("Icon"), src.span(element)[1]])


class TestSingleSvgPerFileDetector:
    def test_one_svg_is_fine(self) -> None:
        tree = program([expr_stmt(jsx("svg", children=[jsx("path")]))])
        assert LintEngine([SingleSvgPerFileDetector]).lint(tree) == []

    def test_every_extra_svg_is_reported(self) -> None:
        tree = program([
            expr_stmt(jsx("svg", rng=[0, 7])),
            expr_stmt(jsx("svg", rng=[10, 17])),
            expr_stmt(jsx("Svg", rng=[20, 27])),
        ])
        diagnostics = LintEngine([SingleSvgPerFileDetector]).lint(tree)
        assert [d.target_range.start for d in diagnostics] == [10, 20]
        assert {d.message_id for d in diagnostics} == {"multipleSvgs"}


class TestSvgCurrentColorDetector:
    @staticmethod
    def _svg(text: str, fill: str, stroke: str) -> tuple[dict, Src]:
        src = Src(text)
        fill_value = src.span(f'"{fill}"')
        stroke_value = src.span(f'"{stroke}"', src.at("stroke"))
        path = jsx("path", [jsx_attr("stroke", literal(stroke, stroke_value))], rng=src.span("<path"))
        svg = jsx("svg", [jsx_attr("fill", literal(fill, fill_value))], [path], src.whole)
        return program([expr_stmt(svg, src.whole)], src.whole), src

    def test_single_color_icon_is_fixed_to_current_color(self) -> None:
        text = '<svg fill="#000"><path stroke="#000" /></svg>'
        tree, _ = self._svg(text, "#000", "#000")

        diagnostics = LintEngine([SvgCurrentColorDetector]).lint(tree)

        assert [d.data["attribute"] for d in diagnostics] == ["fill", "stroke"]
        assert all(d.data["color"] == "#000" for d in diagnostics)
        fixed = FixApplier.apply(text, diagnostics).text
        assert fixed == '<svg fill="currentColor"><path stroke="currentColor" /></svg>'

    def test_color_case_differences_are_one_color(self) -> None:
        tree, _ = self._svg('<svg fill="#FFF"><path stroke="#fff" /></svg>', "#FFF", "#fff")
        assert len(LintEngine([SvgCurrentColorDetector]).lint(tree)) == 2

    def test_multi_color_icon_is_exempt(self) -> None:
        tree, _ = self._svg('<svg fill="#000"><path stroke="#f00" /></svg>', "#000", "#f00")
        assert LintEngine([SvgCurrentColorDetector]).lint(tree) == []

    def test_sentinels_do_not_count_as_colors(self) -> None:
        tree, _ = self._svg('<svg fill="none"><path stroke="#000" /></svg>', "none", "#000")
        diagnostics = LintEngine([SvgCurrentColorDetector]).lint(tree)
        assert len(diagnostics) == 1
        assert diagnostics[0].data["attribute"] == "stroke"

    def test_already_current_color_is_fine(self) -> None:
        tree, _ = self._svg(
            '<svg fill="currentColor"><path stroke="none" /></svg>', "currentColor", "none")
        assert LintEngine([SvgCurrentColorDetector]).lint(tree) == []

    def test_gradient_reference_exempts_icon(self) -> None:
        tree, _ = self._svg('<svg fill="url(#g)"><path stroke="#000" /></svg>', "url(#g)", "#000")
        assert LintEngine([SvgCurrentColorDetector]).lint(tree) == []


class TestMemoizedExportDetector:
    @staticmethod
    def _tree(text: str, specifiers: list[dict] | None) -> dict:
        src = Src(text)
        body = []
        if specifiers is not None:
            body.append(import_decl(specifiers, "react", src.span("import"), source_rng=src.span("'react'")))
        body.append(_icon_const(src))
        export_at = src.at("export")
        body.append(export_default(ident("Icon", src.span("Icon", export_at)),
                                   src.span("export default Icon;")))
        return program(body, src.whole)

    def test_default_import_gains_named_memo(self) -> None:
        text = "import React from 'react';\nconst Icon = () => <svg />;\nexport default Icon;\n"
        src = Src(text)
        tree = self._tree(text, [default_spec("React", src.span("React"))])

        diagnostics = LintEngine([MemoizedExportDetector]).lint(tree)

        assert len(diagnostics) == 1
        assert diagnostics[0].data["componentName"] == "Icon"
        assert FixApplier.apply(text, diagnostics).text == (
            "import React, { memo } from 'react';\n"
            "const Icon = () => <svg />;\n"
            "export default memo(Icon);\n"
        )

    def test_empty_brace_list_after_default_is_reported_without_fix(self) -> None:
        text = "import React, {} from 'react';\nconst Icon = () => <svg />;\nexport default Icon;\n"
        src = Src(text)
        tree = self._tree(text, [default_spec("React", src.span("React"))])

        diagnostics = LintEngine([MemoizedExportDetector]).lint(tree)

        assert len(diagnostics) == 1
        assert diagnostics[0].fix is None

    def test_missing_import_is_created(self) -> None:
        text = "const Icon = () => <svg />;\nexport default Icon;\n"
        diagnostics = LintEngine([MemoizedExportDetector]).lint(self._tree(text, None))
        assert FixApplier.apply(text, diagnostics).text == (
            "import { memo } from 'react';\n"
            "const Icon = () => <svg />;\n"
            "export default memo(Icon);\n"
        )

    def test_named_import_is_extended(self) -> None:
        text = "import { useState } from 'react';\nconst Icon = () => <svg />;\nexport default Icon;\n"
        src = Src(text)
        tree = self._tree(text, [named_spec("useState", rng=src.span("useState"))])
        fixed = FixApplier.apply(text, LintEngine([MemoizedExportDetector]).lint(tree)).text
        assert fixed.startswith("import { useState, memo } from 'react';\n")
        assert fixed.endswith("export default memo(Icon);\n")

    def test_namespace_import_is_used_as_is(self) -> None:
        text = "import * as React from 'react';\nconst Icon = () => <svg />;\nexport default Icon;\n"
        src = Src(text)
        tree = self._tree(text, [namespace_spec("React", src.span("* as React"))])
        fixed = FixApplier.apply(text, LintEngine([MemoizedExportDetector]).lint(tree)).text
        assert fixed == (
            "import * as React from 'react';\n"
            "const Icon = () => <svg />;\n"
            "export default React.memo(Icon);\n"
        )

    def test_existing_memo_binding_is_reused(self) -> None:
        text = "import { memo } from 'react';\nconst Icon = () => <svg />;\nexport default Icon;\n"
        src = Src(text)
        tree = self._tree(text, [named_spec("memo", rng=src.span("memo"))])
        fixed = FixApplier.apply(text, LintEngine([MemoizedExportDetector]).lint(tree)).text
        assert fixed == (
            "import { memo } from 'react';\n"
            "const Icon = () => <svg />;\n"
            "export default memo(Icon);\n"
        )

    def test_already_wrapped_export_is_fine(self) -> None:
        text = "const Icon = () => <svg />;\nexport default memo(Icon);\n"
        src = Src(text)
        wrapped = node("CallExpression", src.span("memo(Icon)"), callee=ident("memo"),
                       arguments=[ident("Icon")], optional=False)
        tree = program([_icon_const(src), export_default(wrapped)], src.whole)
        assert LintEngine([MemoizedExportDetector]).lint(tree) == []

    def test_non_component_export_is_ignored(self) -> None:
        text = "const config = {};\nexport default config;\n"
        src = Src(text)
        tree = program([
            const(ident("config", src.span("config")), node("ObjectExpression", None, properties=[])),
            export_default(ident("config", src.span("config", src.at("export")))),
        ], src.whole)
        assert LintEngine([MemoizedExportDetector]).lint(tree) == []


class TestSvgPropsTypeDetector:
    def test_web_icon_gets_svg_props(self) -> None:
        text = "const Icon = (props) => <svg />;\n"
        src = Src(text)
        tree = program([_icon_const(src, params=[ident("props", src.span("props"))])], src.whole)

        diagnostics = LintEngine([SvgPropsTypeDetector]).lint(tree)

        assert len(diagnostics) == 1
        assert diagnostics[0].data["propsType"] == "SVGProps<SVGSVGElement>"
        assert FixApplier.apply(text, diagnostics).text == (
            "import type { SVGProps } from 'react';\n"
            "const Icon = (props: SVGProps<SVGSVGElement>) => <svg />;\n"
        )

    def test_unparenthesized_param_is_wrapped(self) -> None:
        text = "const Icon = props => <svg />;\n"
        src = Src(text)
        tree = program([_icon_const(src, params=[ident("props", src.span("props"))],
                                    arrow_start="props")], src.whole)
        fixed = FixApplier.apply(text, LintEngine([SvgPropsTypeDetector]).lint(tree)).text
        assert fixed.endswith("const Icon = (props: SVGProps<SVGSVGElement>) => <svg />;\n")

    def test_native_icon_gets_svg_props_from_react_native_svg(self) -> None:
        text = ("import Svg, { Path } from 'react-native-svg';\n"
                "const Icon = (props) => <Svg />;\n")
        src = Src(text)
        imports = import_decl(
            [default_spec("Svg", src.span("Svg")), named_spec("Path", rng=src.span("Path"))],
            "react-native-svg",
            src.span("import Svg, { Path } from 'react-native-svg';"),
        )
        tree = program(
            [imports, _icon_const(src, tag="Svg", params=[ident("props", src.span("props"))])],
            src.whole,
        )

        diagnostics = LintEngine([SvgPropsTypeDetector]).lint(tree)

        assert diagnostics[0].data["propsType"] == "SvgProps"
        assert FixApplier.apply(text, diagnostics).text == (
            "import Svg, { Path, SvgProps } from 'react-native-svg';\n"
            "const Icon = (props: SvgProps) => <Svg />;\n"
        )

    def test_annotated_param_is_fine(self) -> None:
        text = "const Icon = (props: SvgProps) => <svg />;\n"
        src = Src(text)
        param = ident("props", src.span("props: SvgProps"),
                      typeAnnotation=node("TSTypeAnnotation", src.span(": SvgProps")))
        tree = program([_icon_const(src, params=[param])], src.whole)
        assert LintEngine([SvgPropsTypeDetector]).lint(tree) == []

    def test_icon_without_params_is_reported_without_fix(self) -> None:
        text = "function Icon() { return <svg />; }\n"
        src = Src(text)
        fn = function_decl(ident("Icon", src.span("Icon")), [],
                           block([ret(jsx("svg", rng=src.span("<svg />")))]), src.span(text.strip()))
        diagnostics = LintEngine([SvgPropsTypeDetector]).lint(program([fn], src.whole))
        assert len(diagnostics) == 1
        assert diagnostics[0].data["componentName"] == "Icon"
        assert diagnostics[0].fix is None

    def test_component_without_svg_is_ignored(self) -> None:
        text = "const Icon = (props) => <div />;\n"
        src = Src(text)
        tree = program([_icon_const(src, tag="div", params=[ident("props", src.span("props"))])],
                       src.whole)
        assert LintEngine([SvgPropsTypeDetector]).lint(tree) == []
