"""Browser pages: a sign-in form and the single-page app shell."""

from __future__ import annotations

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import HTMLResponse, RedirectResponse

from visual_dictionary.api.session import current_session

router = APIRouter(tags=["pages"])

PROTECTED_PATHS = ("/", "/my-dictionary", "/saved-analyses", "/word/{word}")


async def app_shell(request: Request) -> Response:
    """Serve the app shell, sending visitors without a session to /auth."""
    if current_session(request) is None:
        return RedirectResponse("/auth", status_code=status.HTTP_303_SEE_OTHER)
    return HTMLResponse(APP_SHELL_HTML)


for _path in PROTECTED_PATHS:
    router.add_api_route(
        _path,
        app_shell,
        methods=["GET"],
        response_class=HTMLResponse,
        include_in_schema=False,
    )


AUTH_PAGE_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>ImageToDict - Sign in</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      .row { margin-bottom: 1rem; }
      input { padding: 0.4rem 0.6rem; width: 320px; }
      button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      #toast { color: #b91c1c; }
    </style>
  </head>
  <body>
    <h1>ImageToDict</h1>
    <div class="row"><input id="email" type="email" placeholder="Email" /></div>
    <div class="row">
      <input id="password" type="password" placeholder="Password" />
    </div>
    <div class="row">
      <button onclick="submitAuth('/auth/sign-in')">Sign in</button>
      <button onclick="submitAuth('/auth/sign-up')">Sign up</button>
    </div>
    <p id="toast"></p>
    <script>
      async function submitAuth(path) {
        const toast = document.getElementById('toast');
        const res = await fetch(path, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify({
            email: document.getElementById('email').value,
            password: document.getElementById('password').value
          })
        });
        const data = await res.json();
        if (!res.ok) { toast.textContent = data.error || 'Error: ' + res.status; return; }
        if (!data.user) { toast.textContent = data.message; return; }
        window.location.href = '/';
      }
    </script>
  </body>
</html>
"""

APP_SHELL_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>ImageToDict</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      nav a, nav button { margin-right: 1rem; }
      .card { border: 1px solid #ddd; border-radius: 8px; padding: 1rem; margin: 0.5rem 0; }
      .example { color: #666; font-style: italic; }
      #preview { max-width: 480px; display: block; margin-top: 1rem; }
      #toast { position: fixed; bottom: 1rem; right: 1rem; background: #111; color: #fff;
               padding: 0.5rem 1rem; border-radius: 6px; display: none; }
    </style>
  </head>
  <body>
    <nav>
      <strong>ImageToDict</strong>
      <a href="/">Home</a>
      <a href="/my-dictionary">Dictionary</a>
      <form method="post" action="/auth/sign-out" style="display:inline">
        <button type="submit">Sign Out</button>
      </form>
    </nav>
    <main id="view"></main>
    <div id="toast"></div>
    <script>
      const view = document.getElementById('view');
      let audioUrl = null;
      const pendingAudio = new Set();

      function toast(message) {
        const el = document.getElementById('toast');
        el.textContent = message;
        el.style.display = 'block';
        setTimeout(() => { el.style.display = 'none'; }, 4000);
      }

      function escapeHtml(value) {
        const div = document.createElement('div');
        div.textContent = value == null ? '' : value;
        return div.innerHTML;
      }

      function card(word, definition, sentence) {
        return '<div class="card"><h3><a href="/word/' + encodeURIComponent(word) + '">'
          + escapeHtml(word) + '</a> <button data-word="' + escapeHtml(word)
          + '" onclick="playAudio(this.dataset.word)">&#128264;</button></h3><p>'
          + escapeHtml(definition) + '</p><p class="example">"' + escapeHtml(sentence)
          + '"</p></div>';
      }

      async function playAudio(word) {
        if (pendingAudio.has(word)) return;
        pendingAudio.add(word);
        try {
          const res = await fetch('/api/audio', {
            method: 'POST',
            headers: { 'Content-Type': 'application/json' },
            body: JSON.stringify({ text: word })
          });
          if (!res.ok) { toast('Failed to generate audio for the word'); return; }
          const blob = await res.blob();
          if (audioUrl) URL.revokeObjectURL(audioUrl);
          audioUrl = URL.createObjectURL(blob);
          await new Audio(audioUrl).play();
        } catch (err) {
          console.error(err);
          toast('Failed to play audio. Please try again.');
        } finally {
          pendingAudio.delete(word);
        }
      }

      function renderUploader() {
        view.innerHTML = '<h1>Visual Dictionary</h1>'
          + '<input id="file" type="file" accept=".jpeg,.jpg,.png,.gif,.webp" />'
          + '<p>Supports: JPG, PNG, GIF, WEBP</p><p id="status"></p>'
          + '<img id="preview" /><div id="results"></div>';
        document.getElementById('file').addEventListener('change', async (event) => {
          const file = event.target.files[0];
          if (!file) return;
          document.getElementById('preview').src = URL.createObjectURL(file);
          const status = document.getElementById('status');
          status.textContent = 'Analyzing image...';
          const form = new FormData();
          form.append('file', file);
          try {
            const res = await fetch('/api/analyses', { method: 'POST', body: form });
            const data = await res.json();
            if (!res.ok) { toast(data.error || 'Failed to process image'); return; }
            document.getElementById('results').innerHTML = data.analysis
              .map((r) => card(r.word, r.definition, r.sampleSentence)).join('');
            if (data.failed_inserts) toast('Some words could not be saved');
            else toast('Image analyzed successfully!');
          } catch (err) {
            console.error(err);
            toast('Failed to process image');
          } finally {
            status.textContent = '';
          }
        });
      }

      async function renderDictionary() {
        view.innerHTML = '<h1>My Dictionary</h1>'
          + '<input id="search" placeholder="Search words" /> '
          + '<button id="sort">Sort A-Z</button><div id="words"></div>';
        let sort = 'asc';
        async function load() {
          const params = new URLSearchParams();
          const q = document.getElementById('search').value;
          if (q) params.set('q', q);
          params.set('sort', sort);
          const res = await fetch('/api/words?' + params.toString());
          const data = await res.json();
          if (!res.ok) { toast(data.error || 'Failed to load words'); return; }
          document.getElementById('words').innerHTML = data.words.length
            ? data.words.map((w) => card(w.word, w.definition, w.sample_sentence)).join('')
            : '<p>Your dictionary is empty. Upload some images to start learning new words!</p>';
        }
        document.getElementById('search').addEventListener('input', load);
        document.getElementById('sort').addEventListener('click', () => {
          sort = sort === 'asc' ? 'desc' : 'asc';
          document.getElementById('sort').textContent = sort === 'asc' ? 'Sort A-Z' : 'Sort Z-A';
          load();
        });
        await load();
      }

      async function renderWord(word) {
        view.innerHTML = '<button onclick="history.back()">Back</button><p>Loading...</p>';
        const res = await fetch('/api/words/' + encodeURIComponent(word) + '/details');
        const data = await res.json();
        if (!res.ok) {
          view.innerHTML = '<button onclick="history.back()">Back</button>'
            + '<div class="card" role="alert">' + escapeHtml(data.error) + ' '
            + escapeHtml(data.resolution || '') + '</div>';
          return;
        }
        const phonetics = data.phonetics.filter((p) => p.text).map((p) => escapeHtml(p.text));
        const meanings = data.meanings.map((m) => '<h3>' + escapeHtml(m.part_of_speech) + '</h3>'
          + m.definitions.map((d) => '<p>' + escapeHtml(d.definition) + '</p>'
            + (d.example ? '<p class="example">"' + escapeHtml(d.example) + '"</p>' : '')).join(''));
        const related = (label, words) => words.length
          ? '<p><strong>' + label + ':</strong> ' + words.map((w) =>
              '<a href="/word/' + encodeURIComponent(w) + '">' + escapeHtml(w) + '</a>').join(', ')
            + '</p>'
          : '';
        const sources = data.source_urls.map((u) =>
          '<li><a href="' + escapeHtml(u) + '" target="_blank" rel="noopener">'
          + escapeHtml(u) + '</a></li>').join('');
        view.innerHTML = '<button onclick="history.back()">Back</button>'
          + '<h1>' + escapeHtml(data.word) + ' <button data-word="' + escapeHtml(data.word)
          + '" onclick="playAudio(this.dataset.word)">&#128264;</button></h1>'
          + '<p>' + phonetics.join(' ') + '</p>' + meanings.join('')
          + related('Synonyms', data.synonyms) + related('Antonyms', data.antonyms)
          + (sources ? '<h3>Sources</h3><ul>' + sources + '</ul>' : '');
      }

      const path = window.location.pathname;
      if (path.startsWith('/word/')) {
        renderWord(decodeURIComponent(path.slice('/word/'.length)));
      } else if (path === '/my-dictionary' || path === '/saved-analyses') {
        renderDictionary();
      } else {
        renderUploader();
      }
    </script>
  </body>
</html>
"""
