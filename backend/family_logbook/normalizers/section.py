def normalize_section(section):
    return section.to_dict()


def normalize_section_definition(definition):
    return {
        "key": definition.key,
        "visible": definition.visible,
        "fields": {
            name: {
                "type": spec.type,
                "default": spec.default,
                "nullable": spec.nullable,
            }
            for name, spec in definition.fields.items()
        },
    }


def normalize_page(page_type, sections, edit_session=None):
    data = {
        "page_type": page_type,
        "sections": [normalize_section(s) for s in sections],
    }

    if edit_session is not None:
        data["capabilities"] = {
            "can_edit": edit_session.can_enter_edit,
            "controls": list(edit_session.controls),
        }

    return data
