"""Static HTML served on ``/``."""

from __future__ import annotations


DOCS_URL = "https://gitlab.com/vfosnar/dummy-bakalari"

HOME_HTML = f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta http-equiv="X-UA-Compatible" content="IE=edge">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Dummy Bakaláři</title>
    <style>
        :root {{
            --c-text: #4c4f69;
            --c-bg: #eff1f5;
            --c-primary: #8839ef;
        }}

        @media screen and (prefers-color-scheme: dark) {{
            :root {{
                --c-text: #cdd6f4;
                --c-bg: #1e1e2e;
                --c-primary: #cba6f7;
            }}
        }}

        body {{
            margin: 2rem;
            color: var(--c-text);
            background-color: var(--c-bg);
            font-size: 20px;
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif;
            text-align: center;
        }}

        a {{
            color: var(--c-primary);
        }}
    </style>
</head>
<body>
    This is a dummy Bakaláři instance. Documentation can be found <a href="{DOCS_URL}">here</a> 📃
</body>
</html>
"""
