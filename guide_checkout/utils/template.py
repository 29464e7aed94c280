from jinja2 import Environment, PackageLoader, select_autoescape

env = Environment(
    loader=PackageLoader("guide_checkout", "templates"),
    autoescape=select_autoescape(["html"])
)

def render_template(template_path: str, **context) -> str:
    template = env.get_template(template_path)
    return template.render(**context)
