"""Text-level HTML rewriting for exported pages.

Works directly on markup with regular expressions instead of a DOM, so
malformed documents pass through untouched wherever a pattern does not match.
Element removal stops at the first closing tag of a matching name, which
truncates incorrectly when a removed element nests another one of the same
tag.
"""

import json
import re
from typing import Callable, Mapping
from urllib.parse import urljoin

from framer_export.exporter.domain.rules import url_origin, url_pathname

MARKER_SELECTORS: tuple[str, ...] = (
    "a.__framer-badge",
    ".__framer-badge",
    "#__framer-badge-container",
    "div#__framer-badge-container",
    '[data-framer-name="Badge"]',
    '[data-framer-appear-id][class*="__framer-badge"]',
    '[class*="__framer-badge"]',
    'div[id^="__framer-badge"]',
    'div[class^="framer-"][class*="__framer-badge"]',
    "#__framer-editorbar-container",
    "#__framer-editorbar-button",
    "#__framer-editorbar-label",
    '[id^="__framer-editorbar"]',
    'div[id^="__framer-editorbar"]',
)

HIDE_STYLE = (
    '<style data-export="framer-hide">'
    + ", ".join(MARKER_SELECTORS)
    + " { display: none !important; pointer-events: none !important; visibility: hidden !important; }"
    + "</style>"
)

REMOVER_SCRIPT = (
    '<script data-export="framer-hide">'
    "(function(){function rm(){try{var sel="
    + json.dumps(list(MARKER_SELECTORS))
    + ';document.querySelectorAll(sel.join(",")).forEach(function(n){try{n.remove();}catch(_){}});}catch(e){}}'
    "rm();var mo=new MutationObserver(function(){rm();});"
    "try{mo.observe(document.documentElement||document.body,{childList:true,subtree:true});}catch(_){}"
    'window.addEventListener("load",rm);})();'
    "</script>"
)

# Badge first, then the editor bar, then its iframe variants.
ARTIFACT_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern)
    for pattern in (
        r"""<div[^>]*\bid=("|')__framer-badge-container\1[^>]*>[\s\S]*?</div>""",
        r"""<[^>]*class=("|')[^"']*__framer-badge[^"']*\1[^>]*>[\s\S]*?</[a-zA-Z0-9:-]+>""",
        r"""<[^>]*class=("|')[^"']*__framer-badge[^"']*\1[^>]*/>""",
        r"""<div[^>]*\bid=("|')__framer-editorbar-container\1[^>]*>[\s\S]*?</div>""",
        r"""<button[^>]*id=("|')__framer-editorbar-button\1[^>]*>[\s\S]*?</button>""",
        r"""<span[^>]*id=("|')__framer-editorbar-label\1[^>]*>[\s\S]*?</span>""",
        r"""<[^>]*id=("|')__framer-editorbar[^"']*\1[^>]*>[\s\S]*?</[a-zA-Z0-9:-]+>""",
        r"""<iframe[^>]*id=("|')__framer-editorbar\1[\s\S]*?</iframe>""",
        r"""<iframe[^>]*id=("|')__framer-editorbar\1[^>]*/>""",
    )
)

_HEAD_CLOSE = re.compile(r"</head>", re.IGNORECASE)
_BODY_CLOSE = re.compile(r"</body>", re.IGNORECASE)


class HtmlRewriter:
    def __init__(self, origin: str, path_to_filename: Mapping[str, str]) -> None:
        self.origin = origin
        self.path_to_filename = path_to_filename
        # Same-origin absolute values or root-relative values, quote style kept.
        self._link_pattern = re.compile(
            r"""(href|action)=("|')((?:""" + re.escape(origin) + r""")?/[^"']*)\2"""
        )

    def rewrite(self, html: str) -> str:
        html = self.strip_artifacts(html)
        html = self.rewrite_links(html)
        html = self.inject_style(html)
        return self.inject_script(html)

    @staticmethod
    def strip_artifacts(html: str) -> str:
        for pattern in ARTIFACT_PATTERNS:
            html = pattern.sub("", html)
        return html

    def rewrite_links(self, html: str) -> str:
        def _replace(match: re.Match[str]) -> str:
            attribute, quote, value = match.group(1), match.group(2), match.group(3)
            filename = self.resolve_filename(value)
            if filename is None:
                return match.group(0)
            return f"{attribute}={quote}{filename}{quote}"

        return self._link_pattern.sub(_replace, html)

    def resolve_filename(self, value: str) -> str | None:
        resolved = urljoin(self.origin + "/", value)
        if url_origin(resolved) != self.origin:
            return None
        return self.path_to_filename.get(url_pathname(resolved))

    @staticmethod
    def inject_style(html: str) -> str:
        match = _HEAD_CLOSE.search(html)
        if match is None:
            return HIDE_STYLE + html
        return html[: match.start()] + HIDE_STYLE + html[match.start() :]

    @staticmethod
    def inject_script(html: str) -> str:
        match = _BODY_CLOSE.search(html)
        if match is None:
            return html + REMOVER_SCRIPT
        return html[: match.start()] + REMOVER_SCRIPT + html[match.start() :]


def build_rewriter(origin: str, path_to_filename: Mapping[str, str]) -> Callable[[str], str]:
    return HtmlRewriter(origin, path_to_filename).rewrite
