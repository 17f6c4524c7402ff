"""Reference tables of HTML attribute names.

GLOBAL_ATTRIBUTES apply to every element. ELEMENT_ATTRIBUTES lists the
extra attributes each element accepts, including legacy presentational
ones that browsers still honour.

DOM_EVENT_HANDLERS is the set of ``on*`` handler attributes treated as
dangerous by the scope filter.
"""

GLOBAL_ATTRIBUTES: frozenset[str] = frozenset(
    {
        "accesskey",
        "autocapitalize",
        "autofocus",
        "class",
        "contenteditable",
        "dir",
        "draggable",
        "enterkeyhint",
        "hidden",
        "id",
        "inert",
        "inputmode",
        "is",
        "itemid",
        "itemprop",
        "itemref",
        "itemscope",
        "itemtype",
        "lang",
        "nonce",
        "popover",
        "slot",
        "spellcheck",
        "style",
        "tabindex",
        "title",
        "translate",
        "writingsuggestions",
    }
)

_TABLE_SECTION = frozenset({"align", "char", "charoff", "valign"})
_TABLE_CELL = frozenset(
    {
        "abbr",
        "align",
        "axis",
        "bgcolor",
        "char",
        "charoff",
        "colspan",
        "headers",
        "height",
        "nowrap",
        "rowspan",
        "scope",
        "valign",
        "width",
    }
)
_HEADING = frozenset({"align"})

ELEMENT_ATTRIBUTES: dict[str, frozenset[str]] = {
    "*": GLOBAL_ATTRIBUTES,
    "a": frozenset(
        {
            "charset",
            "coords",
            "download",
            "href",
            "hreflang",
            "name",
            "ping",
            "referrerpolicy",
            "rel",
            "rev",
            "shape",
            "target",
            "type",
        }
    ),
    "area": frozenset(
        {
            "alt",
            "coords",
            "download",
            "href",
            "hreflang",
            "nohref",
            "ping",
            "referrerpolicy",
            "rel",
            "shape",
            "target",
            "type",
        }
    ),
    "audio": frozenset({"autoplay", "controls", "crossorigin", "loop", "muted", "preload", "src"}),
    "base": frozenset({"href", "target"}),
    "blockquote": frozenset({"cite"}),
    "body": frozenset({"alink", "background", "bgcolor", "link", "text", "vlink"}),
    "br": frozenset({"clear"}),
    "button": frozenset(
        {
            "disabled",
            "form",
            "formaction",
            "formenctype",
            "formmethod",
            "formnovalidate",
            "formtarget",
            "name",
            "popovertarget",
            "popovertargetaction",
            "type",
            "value",
        }
    ),
    "canvas": frozenset({"height", "width"}),
    "caption": frozenset({"align"}),
    "col": frozenset({"align", "char", "charoff", "span", "valign", "width"}),
    "colgroup": frozenset({"align", "char", "charoff", "span", "valign", "width"}),
    "data": frozenset({"value"}),
    "del": frozenset({"cite", "datetime"}),
    "details": frozenset({"name", "open"}),
    "dialog": frozenset({"open"}),
    "dir": frozenset({"compact"}),
    "div": frozenset({"align"}),
    "dl": frozenset({"compact"}),
    "embed": frozenset({"height", "src", "type", "width"}),
    "fieldset": frozenset({"disabled", "form", "name"}),
    "font": frozenset({"color", "face", "size"}),
    "form": frozenset(
        {
            "accept",
            "accept-charset",
            "action",
            "autocomplete",
            "enctype",
            "method",
            "name",
            "novalidate",
            "target",
        }
    ),
    "h1": _HEADING,
    "h2": _HEADING,
    "h3": _HEADING,
    "h4": _HEADING,
    "h5": _HEADING,
    "h6": _HEADING,
    "hr": frozenset({"align", "noshade", "size", "width"}),
    "html": frozenset({"manifest", "version"}),
    "iframe": frozenset(
        {
            "align",
            "allow",
            "allowfullscreen",
            "allowpaymentrequest",
            "allowusermedia",
            "frameborder",
            "height",
            "loading",
            "longdesc",
            "marginheight",
            "marginwidth",
            "name",
            "referrerpolicy",
            "sandbox",
            "scrolling",
            "src",
            "srcdoc",
            "width",
        }
    ),
    "img": frozenset(
        {
            "align",
            "alt",
            "border",
            "crossorigin",
            "decoding",
            "fetchpriority",
            "height",
            "hspace",
            "ismap",
            "loading",
            "longdesc",
            "name",
            "referrerpolicy",
            "sizes",
            "src",
            "srcset",
            "usemap",
            "vspace",
            "width",
        }
    ),
    "input": frozenset(
        {
            "accept",
            "align",
            "alt",
            "autocomplete",
            "checked",
            "dirname",
            "disabled",
            "form",
            "formaction",
            "formenctype",
            "formmethod",
            "formnovalidate",
            "formtarget",
            "height",
            "ismap",
            "list",
            "max",
            "maxlength",
            "min",
            "minlength",
            "multiple",
            "name",
            "pattern",
            "placeholder",
            "popovertarget",
            "popovertargetaction",
            "readonly",
            "required",
            "size",
            "src",
            "step",
            "type",
            "usemap",
            "value",
            "width",
        }
    ),
    "ins": frozenset({"cite", "datetime"}),
    "label": frozenset({"for", "form"}),
    "legend": frozenset({"align"}),
    "li": frozenset({"type", "value"}),
    "link": frozenset(
        {
            "as",
            "blocking",
            "charset",
            "color",
            "crossorigin",
            "disabled",
            "fetchpriority",
            "href",
            "hreflang",
            "imagesizes",
            "imagesrcset",
            "integrity",
            "media",
            "referrerpolicy",
            "rel",
            "rev",
            "sizes",
            "target",
            "type",
        }
    ),
    "map": frozenset({"name"}),
    "menu": frozenset({"compact"}),
    "meta": frozenset({"charset", "content", "http-equiv", "media", "name", "scheme"}),
    "meter": frozenset({"high", "low", "max", "min", "optimum", "value"}),
    "object": frozenset(
        {
            "align",
            "archive",
            "border",
            "classid",
            "codebase",
            "codetype",
            "data",
            "declare",
            "form",
            "height",
            "hspace",
            "name",
            "standby",
            "type",
            "typemustmatch",
            "usemap",
            "vspace",
            "width",
        }
    ),
    "ol": frozenset({"compact", "reversed", "start", "type"}),
    "optgroup": frozenset({"disabled", "label"}),
    "option": frozenset({"disabled", "label", "selected", "value"}),
    "output": frozenset({"for", "form", "name"}),
    "p": frozenset({"align"}),
    "param": frozenset({"name", "type", "value", "valuetype"}),
    "pre": frozenset({"width"}),
    "progress": frozenset({"max", "value"}),
    "q": frozenset({"cite"}),
    "script": frozenset(
        {
            "async",
            "blocking",
            "charset",
            "crossorigin",
            "defer",
            "fetchpriority",
            "integrity",
            "language",
            "nomodule",
            "referrerpolicy",
            "src",
            "type",
        }
    ),
    "select": frozenset({"autocomplete", "disabled", "form", "multiple", "name", "required", "size"}),
    "slot": frozenset({"name"}),
    "source": frozenset({"height", "media", "sizes", "src", "srcset", "type", "width"}),
    "style": frozenset({"blocking", "media", "type"}),
    "table": frozenset(
        {
            "align",
            "bgcolor",
            "border",
            "cellpadding",
            "cellspacing",
            "frame",
            "rules",
            "summary",
            "width",
        }
    ),
    "tbody": _TABLE_SECTION,
    "td": _TABLE_CELL,
    "template": frozenset(
        {"shadowrootclonable", "shadowrootdelegatesfocus", "shadowrootmode"}
    ),
    "textarea": frozenset(
        {
            "autocomplete",
            "cols",
            "dirname",
            "disabled",
            "form",
            "maxlength",
            "minlength",
            "name",
            "placeholder",
            "readonly",
            "required",
            "rows",
            "wrap",
        }
    ),
    "tfoot": _TABLE_SECTION,
    "th": _TABLE_CELL,
    "thead": _TABLE_SECTION,
    "time": frozenset({"datetime"}),
    "tr": frozenset({"align", "bgcolor", "char", "charoff", "valign"}),
    "track": frozenset({"default", "kind", "label", "src", "srclang"}),
    "ul": frozenset({"compact", "type"}),
    "video": frozenset(
        {
            "autoplay",
            "controls",
            "crossorigin",
            "height",
            "loop",
            "muted",
            "playsinline",
            "poster",
            "preload",
            "src",
            "width",
        }
    ),
}

DOM_EVENT_HANDLERS: frozenset[str] = frozenset(
    {
        "onabort",
        "onautocomplete",
        "onautocompleteerror",
        "onblur",
        "oncancel",
        "oncanplay",
        "oncanplaythrough",
        "onchange",
        "onclick",
        "onclose",
        "oncontextmenu",
        "oncuechange",
        "ondblclick",
        "ondrag",
        "ondragend",
        "ondragenter",
        "ondragexit",
        "ondragleave",
        "ondragover",
        "ondragstart",
        "ondrop",
        "ondurationchange",
        "onemptied",
        "onended",
        "onerror",
        "onfocus",
        "oninput",
        "oninvalid",
        "onkeydown",
        "onkeypress",
        "onkeyup",
        "onload",
        "onloadeddata",
        "onloadedmetadata",
        "onloadstart",
        "onmousedown",
        "onmouseenter",
        "onmouseleave",
        "onmousemove",
        "onmouseout",
        "onmouseover",
        "onmouseup",
        "onmousewheel",
        "onpause",
        "onplay",
        "onplaying",
        "onprogress",
        "onratechange",
        "onreset",
        "onresize",
        "onscroll",
        "onseeked",
        "onseeking",
        "onselect",
        "onshow",
        "onsort",
        "onstalled",
        "onsubmit",
        "onsuspend",
        "ontimeupdate",
        "ontoggle",
        "onvolumechange",
        "onwaiting",
    }
)
