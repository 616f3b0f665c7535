"""Navigation bar and sidebar trees for the documentation site.

Entries are declared as nested mapping literals and built into the tagged
:class:`NavLink` / :class:`NavGroup` variants. Sibling order is preserved
exactly, and sidebar sections resolve their ``base`` prefix into every
relative descendant link so the engine receives final URLs.

Examples
--------
>>> from nymph_site.navigation import build_sidebar
>>> sidebar = build_sidebar(
...     [{"base": "/guide", "items": [{"text": "Getting Started", "link": "/"}]}]
... )
>>> sidebar.sections[0].items[0].link
'/guide/'
"""

from .builder import build_nav, build_sidebar
from .links import is_absolute_url, is_valid_link, join_base
from .models import (
    MultiSidebar,
    NavGroup,
    NavItem,
    NavLink,
    SidebarSection,
    SidebarTree,
    SingleSidebar,
    iter_links,
)

__all__ = [
    "MultiSidebar",
    "NavGroup",
    "NavItem",
    "NavLink",
    "SidebarSection",
    "SidebarTree",
    "SingleSidebar",
    "build_nav",
    "build_sidebar",
    "is_absolute_url",
    "is_valid_link",
    "iter_links",
    "join_base",
]
