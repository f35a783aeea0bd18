from src.models.entities import Category, Template


def make_category(id, name, keywords=()):
    return Category(id=id, name=name, keywords=list(keywords))


def make_template(id, category_id="c1", language_code="en", content="", keywords=(), usage_count=0, success_rate=0):
    return Template(
        id=id,
        name=f"template {id}",
        category_id=category_id,
        language_code=language_code,
        content=content,
        keywords=list(keywords),
        usage_count=usage_count,
        success_rate=success_rate,
    )
