"""
Builds the sidebar tree from a flat list of accessible modules.
"""
from .policy import NAVIGATION_GROUPS, SETTINGS_GROUP, ROUTE_DISPLAY_NAMES


def _title(module):
    return ROUTE_DISPLAY_NAMES.get(module['route']) or module['display_name']


def _item(module, default_icon):
    return {
        'title': _title(module),
        'href': module['route'],
        'icon': module.get('icon') or default_icon,
    }


def build_navigation(modules):
    """
    Group modules into the sidebar sections.

    Dashboard comes first, then each non-empty group, then modules that fit no
    group, then settings (a single settings module is shown on its own).
    Modules without a route, or routed to ``#``, are dropped.
    """
    usable = sorted(
        (m for m in modules if m.get('route') and m['route'] != '#'),
        key=lambda m: m.get('sort_order') or 0,
    )

    items = []

    dashboard = next((m for m in usable if m['name'] == 'dashboard'), None)
    if dashboard is not None:
        items.append(_item(dashboard, 'LayoutDashboard'))

    grouped_names = set()
    grouped_routes = set()
    for title, href, icon, names, extra_children in NAVIGATION_GROUPS:
        members = [m for m in usable if m['name'] in names]
        grouped_names.update(names)
        if not members:
            continue
        grouped_routes.update(m['route'] for m in members)
        children = [_item(m, icon) for m in members]
        children.extend(
            {'title': ROUTE_DISPLAY_NAMES.get(child_href, child_title), 'href': child_href, 'icon': child_icon}
            for child_title, child_href, child_icon in extra_children
        )
        items.append({'title': title, 'href': href, 'icon': icon, 'children': children})

    settings_title, settings_href, settings_icon, settings_names = SETTINGS_GROUP
    for module in usable:
        if module['name'] in grouped_names or module['name'] == 'dashboard':
            continue
        if module['name'] in settings_names or module['route'] in grouped_routes:
            continue
        items.append(_item(module, 'LayoutDashboard'))

    settings_modules = [m for m in usable if m['name'] in settings_names]
    if len(settings_modules) == 1:
        items.append(_item(settings_modules[0], settings_icon))
    elif settings_modules:
        items.append({
            'title': settings_title,
            'href': settings_href,
            'icon': settings_icon,
            'children': [_item(m, settings_icon) for m in settings_modules],
        })

    return items
