#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Sass compilation through libsass.
"""

from typing import Any, Mapping, Optional, Sequence

import sass

from ..errors import AssetError


class SassError(AssetError):
    """Sass source failed to compile."""


def _sass_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return "(" + ", ".join(_sass_value(v) for v in value) + ")"
    return str(value)


def variables_prelude(variables: Mapping[str, Any], indented: bool = False) -> str:
    """Sass declarations for ``variables``, placed before the source."""
    end = "" if indented else ";"
    lines = [f"${name.lstrip('$')}: {_sass_value(value)}{end}" for name, value in variables.items()]
    return "".join(line + "\n" for line in lines)


class SassCompiler:
    """Compiles Sass/SCSS source text to CSS."""

    def compile(
        self,
        source: str,
        import_paths: Sequence[str],
        style: str,
        variables: Optional[Mapping[str, Any]] = None,
        sourcemap: Optional[Mapping[str, str]] = None,
        indented: bool = False,
    ) -> str:
        """Compile ``source``.

        ``sourcemap``, when given, holds the source map ``root`` and makes the
        map embedded inline in the output.
        """
        options: dict = dict(
            string=variables_prelude(variables or {}, indented) + source,
            include_paths=list(import_paths),
            output_style=style,
            indented=indented,
        )
        if sourcemap:
            options.update(
                source_map_embed=True,
                source_map_contents=True,
                source_map_root=sourcemap.get("root", "/"),
            )
        try:
            return sass.compile(**options)
        except sass.CompileError as e:
            raise SassError(str(e).strip()) from e
