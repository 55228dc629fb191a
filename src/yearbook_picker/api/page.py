"""Selection page served to students."""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

if TYPE_CHECKING:
    from yearbook_picker.containers import AppContainer

router = APIRouter(tags=["page"])


@router.get("/", response_class=HTMLResponse)
async def selection_page(request: Request) -> HTMLResponse:
    """Single page that drives the selection API."""
    container: AppContainer = request.app.state.container
    title = html.escape(container.settings.site_title)
    return HTMLResponse(_PAGE_HTML.replace("{{title}}", title))


_PAGE_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{{title}}</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      .layout { display: flex; flex-wrap: wrap; gap: 24px; max-width: 1200px; }
      .column { flex: 1; min-width: 280px; }
      .card { border: 2px solid #166534; border-radius: 1rem; padding: 1.5rem;
              margin-bottom: 1.5rem; }
      .gallery { display: grid; grid-template-columns: repeat(3, 1fr); gap: 12px; }
      .thumb { cursor: pointer; border-radius: 0.5rem; outline: 2px solid #166534; }
      .thumb.selected { outline-width: 4px; outline-offset: 2px; }
      .thumb img, .preview img { width: 100%; aspect-ratio: 4 / 5; object-fit: cover;
                                 border-radius: 0.5rem; }
      .thumb p { margin: 0; font-size: 0.75rem; text-align: center; }
      .error { color: #dc2626; }
      .notice { color: #16a34a; }
      .passed { text-decoration: line-through; color: #dc2626; }
      button { background: #166534; color: white; border: 0; border-radius: 999px;
               padding: 0.5rem 1.5rem; font-weight: 600; }
      button:disabled { opacity: 0.5; }
      input { padding: 0.4rem 0.6rem; width: 240px; text-align: center; }
      [hidden] { display: none; }
    </style>
  </head>
  <body>
    <div class="layout">
      <div class="column">
        <h1>{{title}}</h1>
        <div id="welcome" class="card" hidden>
          <p>Welcome, <strong id="student-name"></strong></p>
          <p class="error">Don't forget to submit your chosen photo by your
            department's deadline!</p>
          <ul id="deadlines"></ul>
        </div>
        <div id="code-form" class="card">
          <input id="code" type="text" placeholder="Enter your code"
                 autocomplete="off" />
          <button id="submit-code" disabled>Submit</button>
          <p id="code-message"></p>
        </div>
        <div id="preview" class="card preview" hidden></div>
      </div>
      <div id="picker" class="column" hidden>
        <div class="card">
          <h2>Photo Gallery</h2>
          <div id="gallery" class="gallery"></div>
        </div>
        <div class="card">
          <p>Your photo package comes with one photo for editing and printing.</p>
          <button id="confirm" disabled>Set as Final Photo</button>
          <p id="confirm-message"></p>
        </div>
      </div>
    </div>
    <script>
      let session = null;

      async function call(method, path, body) {
        const res = await fetch(path, {
          method,
          headers: body ? { 'Content-Type': 'application/json' } : {},
          body: body ? JSON.stringify(body) : undefined,
        });
        if (res.status === 404) {
          return openSession();
        }
        session = await res.json();
        render();
      }

      function openSession() {
        return call('POST', '/api/sessions');
      }

      function sessionPath(suffix) {
        return '/api/sessions/' + session.session_id + suffix;
      }

      function message(el, view) {
        el.textContent = view.error || view.notice || '';
        el.className = view.error ? 'error' : 'notice';
      }

      function renderDeadlines(list) {
        const ul = document.getElementById('deadlines');
        ul.replaceChildren();
        for (const deadline of list) {
          const li = document.createElement('li');
          li.textContent = deadline.label + ': ' + deadline.due;
          if (deadline.passed) li.className = 'passed';
          ul.appendChild(li);
        }
      }

      function renderGallery(view) {
        const gallery = document.getElementById('gallery');
        gallery.replaceChildren();
        for (const photo of view.photos) {
          const tile = document.createElement('div');
          tile.className = 'thumb' + (photo.url === view.selected_url ? ' selected' : '');
          const img = document.createElement('img');
          img.src = photo.url;
          img.alt = 'photo';
          const caption = document.createElement('p');
          caption.textContent = photo.original_name;
          tile.append(img, caption);
          tile.onclick = () => call('POST', sessionPath('/selection'), { url: photo.url });
          gallery.appendChild(tile);
        }
      }

      function render() {
        const view = session;
        const code = document.getElementById('code');
        const resolved = view.student !== null;
        document.getElementById('welcome').hidden = !resolved;
        document.getElementById('code-form').hidden = resolved;
        document.getElementById('preview').hidden = !resolved;
        document.getElementById('picker').hidden = !resolved;
        code.disabled = view.is_busy;
        document.getElementById('submit-code').disabled =
          !view.can_submit_code || !code.value;
        document.getElementById('confirm').disabled = !view.can_confirm;
        message(document.getElementById('code-message'), view);
        message(document.getElementById('confirm-message'), view);
        renderDeadlines(view.deadlines);
        if (!resolved) return;
        document.getElementById('student-name').textContent =
          view.student.first_name + ' ' + view.student.last_name;
        const preview = document.getElementById('preview');
        preview.replaceChildren();
        if (view.selected_url) {
          const img = document.createElement('img');
          img.src = view.selected_url;
          img.alt = 'Selected photo';
          preview.appendChild(img);
        } else {
          preview.textContent = 'No Photo Selected';
        }
        renderGallery(view);
      }

      function submitCode() {
        const value = document.getElementById('code').value;
        if (!session || !session.can_submit_code || !value) return;
        call('POST', sessionPath('/code'), { code: value });
      }

      document.getElementById('code').addEventListener('input', () => {
        if (session) render();
      });
      document.getElementById('code').addEventListener('keydown', (e) => {
        if (e.key === 'Enter') submitCode();
      });
      document.getElementById('submit-code').onclick = submitCode;
      document.getElementById('confirm').onclick = () =>
        call('POST', sessionPath('/confirm'));
      window.addEventListener('pagehide', () => {
        if (session) {
          fetch(sessionPath(''), { method: 'DELETE', keepalive: true });
        }
      });
      openSession();
    </script>
  </body>
</html>
"""
