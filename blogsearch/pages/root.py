"""Root landing page with a live search box wired to the search WebSocket."""

from html import escape


def render_root_page(app_name: str) -> str:
    """Return HTML for the root landing page."""
    title = escape(app_name)
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
        * {{ box-sizing: border-box; }}
        body {{
            font-family: system-ui, sans-serif;
            margin: 0;
            background: #000;
            color: #e0e0e0;
            padding: 2rem 1rem;
        }}
        .wrap {{ max-width: 560px; margin: 0 auto; }}
        h1 {{ color: #fff; font-weight: 600; margin: 0 0 1rem 0; }}
        h2 {{ color: #888; font-size: 0.85rem; text-transform: uppercase; margin: 1.5rem 0 0.5rem; }}
        input {{
            width: 100%;
            padding: 0.75rem;
            background: #111;
            color: #fff;
            border: 1px solid #333;
            font-size: 1rem;
        }}
        ul {{ list-style: none; padding: 0; margin: 0; }}
        li a {{ color: #ccc; display: block; padding: 0.4rem 0; text-decoration: none; }}
        button {{ background: #222; color: #ccc; border: 1px solid #333; padding: 0.3rem 0.8rem; }}
        .muted {{ color: #666; font-size: 0.85rem; }}
    </style>
</head>
<body>
    <div class="wrap">
        <h1>{title}</h1>
        <input id="q" type="search" placeholder="Search posts and people" autocomplete="off">
        <p class="muted" id="status"></p>
        <h2>Posts</h2>
        <ul id="post"></ul>
        <button id="more-post" hidden>More posts</button>
        <h2>People</h2>
        <ul id="user"></ul>
        <button id="more-user" hidden>More people</button>
        <p class="muted">API at <code>/api/v1</code> &middot; <a href="/docs">docs</a></p>
    </div>
    <script>
        (function () {{
            var proto = window.location.protocol === 'https:' ? 'wss://' : 'ws://';
            var ws = new WebSocket(proto + window.location.host + '/api/v1/search/live');
            var status = document.getElementById('status');
            function render(kind, section) {{
                var list = document.getElementById(kind);
                list.innerHTML = '';
                section.items.forEach(function (hit) {{
                    var li = document.createElement('li');
                    var a = document.createElement('a');
                    a.href = hit.link;
                    a.textContent = hit.label;
                    li.appendChild(a);
                    list.appendChild(li);
                }});
                document.getElementById('more-' + kind).hidden = section.exhausted || section.loading;
            }}
            ws.onmessage = function (event) {{
                var msg = JSON.parse(event.data);
                if (msg.type !== 'session') return;
                render('post', msg.posts);
                render('user', msg.users);
                status.textContent = msg.error ? msg.error
                    : msg.loading ? 'Searching...'
                    : msg.no_results ? 'No results' : '';
            }};
            document.getElementById('q').addEventListener('input', function (e) {{
                ws.send(JSON.stringify({{type: 'input', term: e.target.value}}));
            }});
            ['post', 'user'].forEach(function (kind) {{
                document.getElementById('more-' + kind).addEventListener('click', function () {{
                    ws.send(JSON.stringify({{type: 'load_more', kind: kind}}));
                }});
            }});
        }})();
    </script>
</body>
</html>
""".strip()
