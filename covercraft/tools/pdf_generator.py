def create_pdf(html_content: str, css_content: str) -> bytes:
    """Renders HTML and CSS content into PDF bytes using WeasyPrint."""
    # Imported lazily: WeasyPrint loads native Pango libraries at import time
    from weasyprint import HTML, CSS

    css = CSS(string=css_content)
    html = HTML(string=html_content, base_url='.')
    return html.write_pdf(stylesheets=[css])
