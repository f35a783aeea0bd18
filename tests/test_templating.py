from src.utils.templating import render


def test_known_placeholders_replaced_unknown_kept():
    assert render("Hi {{name}}, {{unknown}}", {"name": "Sam"}) == "Hi Sam, {{unknown}}"


def test_text_without_placeholders_is_unchanged():
    text = "Thanks for reaching out. We'll reply within a day."
    assert render(text, {"name": "Sam", "other": "x"}) == text
    assert render("", {"name": "Sam"}) == ""


def test_every_occurrence_is_replaced():
    body = "{{customer_name}}, your plan is {{subscription_type}}. Bye {{customer_name}}!"
    out = render(body, {"customer_name": "Ana", "subscription_type": "Premium"})
    assert out == "Ana, your plan is Premium. Bye Ana!"


def test_variable_order_does_not_matter():
    body = "{{a}}-{{b}}"
    assert render(body, {"a": "1", "b": "2"}) == render(body, {"b": "2", "a": "1"}) == "1-2"


def test_values_are_inserted_verbatim():
    assert render("Path: {{p}}", {"p": r"C:\new\{{x}}"}) == r"Path: C:\new\{{x}}"


def test_unterminated_placeholder_is_literal():
    assert render("Hello {{name", {"name": "Sam"}) == "Hello {{name"
    assert render("{{name}} and {{", {"name": "Sam"}) == "Sam and {{"


def test_placeholder_names_are_not_trimmed():
    assert render("Hi {{ name }}", {"name": "Sam"}) == "Hi {{ name }}"
