"""Marketing landing page: hero, how it works, why subscribe, testimonials, call to action."""

from html import escape

_STEPS = (
    ("Create your account", "Sign up with e-mail and password or continue with Google."),
    ("Pick your newsletters", "Browse what is published and subscribe to the ones you like."),
    ("Read and reply", "Open any issue in your dashboard and write back to the editors."),
)

_REASONS = (
    ("Curated issues", "Every newsletter is written and reviewed before it is published."),
    ("A real conversation", "Replies land in the editors' inbox, and their answers come back to you."),
    ("You stay in control", "Subscribe and unsubscribe from your dashboard whenever you want."),
)

_TESTIMONIALS = (
    ("The only newsletter I actually answer. And they answer back.", "Amara, product designer"),
    ("Short, well written, and it shows up exactly when it should.", "Daniel, engineer"),
    ("I subscribed to one issue and ended up following all of them.", "Grace, librarian"),
)


def _cards(items: tuple[tuple[str, str], ...], css_class: str) -> str:
    return "\n".join(
        f'<article class="{css_class}"><h3>{escape(title)}</h3><p>{escape(body)}</p></article>'
        for title, body in items
    )


def _quotes() -> str:
    return "\n".join(
        f'<figure class="quote"><blockquote>{escape(text)}</blockquote>'
        f"<figcaption>{escape(author)}</figcaption></figure>"
        for text, author in _TESTIMONIALS
    )


def render_root_page(app_name: str) -> str:
    """Return HTML for the landing page."""
    name = escape(app_name)
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{name}: newsletters worth replying to</title>
    <style>
        * {{ box-sizing: border-box; }}
        body {{
            font-family: system-ui, sans-serif;
            margin: 0;
            background: #fafaf7;
            color: #222;
            line-height: 1.55;
        }}
        .wrap {{ max-width: 960px; margin: 0 auto; padding: 0 1.25rem; }}
        .hero {{ text-align: center; padding: 5rem 0 3rem; }}
        .hero h1 {{ font-size: clamp(2rem, 6vw, 3rem); margin: 0 0 0.75rem; letter-spacing: -0.02em; }}
        .hero p {{ color: #555; font-size: 1.125rem; margin: 0 auto 2rem; max-width: 36rem; }}
        section {{ padding: 2.5rem 0; }}
        section h2 {{ text-align: center; font-size: 1.5rem; margin: 0 0 1.5rem; }}
        .grid {{ display: grid; grid-template-columns: repeat(auto-fit, minmax(240px, 1fr)); gap: 1rem; }}
        .step, .reason {{ background: #fff; border: 1px solid #e6e6e0; padding: 1.25rem 1.5rem; }}
        .step h3, .reason h3 {{ margin: 0 0 0.5rem; font-size: 1.0625rem; }}
        .step p, .reason p {{ margin: 0; color: #555; }}
        .quote {{ margin: 0; background: #fff; border-left: 3px solid #2d6a4f; padding: 1rem 1.25rem; }}
        .quote blockquote {{ margin: 0 0 0.5rem; font-style: italic; }}
        .quote figcaption {{ color: #777; font-size: 0.875rem; }}
        .cta {{ text-align: center; background: #2d6a4f; color: #fff; padding: 3rem 1.25rem; }}
        .cta h2 {{ color: #fff; }}
        a.btn {{
            display: inline-block;
            padding: 0.7rem 1.4rem;
            background: #2d6a4f;
            color: #fff;
            text-decoration: none;
            font-weight: 600;
        }}
        .cta a.btn {{ background: #fff; color: #2d6a4f; }}
        .foot {{ text-align: center; color: #888; font-size: 0.8125rem; padding: 2rem 0; }}
    </style>
</head>
<body>
    <header class="hero wrap">
        <h1>{name}</h1>
        <p>Newsletters you can talk back to. Subscribe to the issues you care about
        and reply straight from your dashboard.</p>
        <a href="/docs" class="btn">Get started</a>
    </header>

    <section class="wrap" aria-labelledby="how-heading">
        <h2 id="how-heading">How it works</h2>
        <div class="grid">
{_cards(_STEPS, "step")}
        </div>
    </section>

    <section class="wrap" aria-labelledby="why-heading">
        <h2 id="why-heading">Why subscribe</h2>
        <div class="grid">
{_cards(_REASONS, "reason")}
        </div>
    </section>

    <section class="wrap" aria-labelledby="voices-heading">
        <h2 id="voices-heading">What readers say</h2>
        <div class="grid">
{_quotes()}
        </div>
    </section>

    <section class="cta" aria-labelledby="cta-heading">
        <h2 id="cta-heading">Join the conversation</h2>
        <p>Create a free account and read your first issue today.</p>
        <a href="/docs" class="btn">Create an account</a>
    </section>

    <footer class="foot">{name} · API at <code>/api/v1</code></footer>
</body>
</html>
""".strip()
