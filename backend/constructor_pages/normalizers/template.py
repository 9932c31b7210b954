def normalize_field(field):
    return {
        "id": field.id,
        "name": field.name,
        "code_name": field.code_name,
        "type": field.type_value,
        "position": field.position,
    }


def normalize_template(template, include_fields=True):
    data = {
        "id": template.id,
        "name": template.name,
        "code_name": template.code_name,
    }

    if include_fields:
        data["fields"] = [normalize_field(f) for f in template.fields]

    return data
