from pagetree.domain.titles import project_titles


def normalize_page(page, admin=False, path=None):
    data = {
        "id": page.id,
        "title": page.title,
        "slug": page.slug,
        "path": path,
        "parent_id": page.parent_id,
        "titles": project_titles(page)._asdict(),
    }

    if admin:
        data.update({
            "menu_title": page.menu_title,
            "browser_title": page.browser_title,
            "custom_slug": page.custom_slug,
            "link_url": page.link_url,
            "position": page.position,
            "draft": page.draft,
            "show_in_menu": page.show_in_menu,
            "skip_to_first_child": page.skip_to_first_child,
        })

    return data
