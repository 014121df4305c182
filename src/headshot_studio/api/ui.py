"""Minimal browser front end for the session API."""

INDEX_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>AI Headshot Pro</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; max-width: 56rem; }
      h1 { margin-bottom: 0.5rem; }
      .row { margin-bottom: 1rem; }
      .hidden { display: none; }
      .error { background: #fef2f2; color: #b91c1c; padding: 0.6rem 1rem; }
      img { max-width: 320px; margin-right: 1rem; }
      button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      textarea { width: 100%; }
    </style>
  </head>
  <body>
    <h1>AI Headshot Pro</h1>
    <div id="error" class="row error hidden"></div>

    <section id="upload" class="row hidden">
      <p>Upload a casual selfie and turn it into a studio-quality headshot.</p>
      <input id="file" type="file" accept="image/jpeg,image/png,image/webp" />
    </section>

    <section id="configure" class="row hidden">
      <img id="original" alt="Original" />
      <div class="row"><select id="style"></select></div>
      <div id="custom" class="row hidden">
        <label for="prompt">Describe your desired edit</label>
        <textarea id="prompt" rows="4"></textarea>
      </div>
      <button id="generate">Generate Headshot</button>
      <button onclick="call('POST', 'reset')">Start Over</button>
    </section>

    <section id="result" class="row hidden">
      <img id="generated" alt="Generated headshot" />
      <div class="row">
        <a id="download" href="#">Download Image</a>
        <button onclick="call('POST', 'background')">Edit Background</button>
        <button onclick="call('POST', 'try-again')">Try Another Style</button>
        <button onclick="call('POST', 'reset')">Start Over</button>
      </div>
      <div id="bg" class="row hidden">
        <div id="bg-status" class="row"></div>
        <button id="bg-start" onclick="call('POST', 'background/start')">Remove Background</button>
        <img id="bg-image" class="hidden" alt="Background removed" />
        <div id="bg-controls" class="row hidden">
          <select id="backdrop">
            <option value="transparent">Transparent</option>
            <option value="white">White</option>
            <option value="grey">Grey</option>
            <option value="dark">Dark</option>
            <option value="blue">Blue</option>
            <option value="green">Green</option>
          </select>
          <a id="bg-download" href="#">Download Edited</a>
          <button onclick="call('POST', 'background/cancel')">Cancel Editing</button>
        </div>
        <button onclick="call('DELETE', 'background')">Back to results</button>
      </div>
    </section>

    <script>
      let sessionId = null;
      const $ = (id) => document.getElementById(id);

      async function call(method, path, body) {
        const options = { method };
        if (body instanceof FormData) {
          options.body = body;
        } else if (body !== undefined) {
          options.headers = { 'Content-Type': 'application/json' };
          options.body = JSON.stringify(body);
        }
        const res = await fetch('/sessions/' + sessionId + (path ? '/' + path : ''), options);
        const data = await res.json();
        if (!res.ok) {
          showError(data.detail || ('Error: ' + res.status));
          return;
        }
        render(data);
      }

      function showError(message) {
        $('error').textContent = message || '';
        $('error').classList.toggle('hidden', !message);
      }

      function render(session) {
        const base = '/sessions/' + session.id;
        const stamp = '?t=' + Date.now();
        showError(session.last_error);
        $('upload').classList.toggle('hidden', session.screen !== 'UPLOAD');
        const configuring = session.screen === 'CONFIGURE' || session.screen === 'GENERATING';
        $('configure').classList.toggle('hidden', !configuring);
        $('result').classList.toggle('hidden', session.screen !== 'RESULT');
        $('style').value = session.selected_style_id;
        $('custom').classList.toggle('hidden', session.selected_style_id !== 'custom');
        $('generate').disabled = session.screen === 'GENERATING';
        $('generate').textContent = session.screen === 'GENERATING' ? 'Generating...' : 'Generate Headshot';
        if (session.original_image) $('original').src = base + '/images/original' + stamp;
        if (session.generated_image) {
          $('generated').src = base + '/images/generated' + stamp;
          $('download').href = base + '/download';
        }
        const edit = session.background_edit;
        $('bg').classList.toggle('hidden', !edit);
        if (edit) {
          $('bg-status').textContent = edit.busy ? 'Removing background...' : (edit.last_error || '');
          $('bg-start').classList.toggle('hidden', edit.state === 'EDITED' || edit.busy);
          $('bg-controls').classList.toggle('hidden', edit.state !== 'EDITED');
          $('bg-image').classList.toggle('hidden', !edit.has_processed_image);
          if (edit.has_processed_image) $('bg-image').src = base + '/background/image' + stamp;
          $('backdrop').value = edit.selected_backdrop;
          $('bg-download').href = base + '/background/download';
        }
      }

      async function init() {
        const styles = await (await fetch('/styles')).json();
        for (const style of styles.styles) {
          const option = document.createElement('option');
          option.value = style.id;
          option.textContent = (style.icon || '') + ' ' + style.name + ' - ' + style.description;
          $('style').appendChild(option);
        }
        const res = await fetch('/sessions', { method: 'POST' });
        const session = await res.json();
        sessionId = session.id;
        render(session);
      }

      $('file').addEventListener('change', (event) => {
        const file = event.target.files[0];
        if (!file) return;
        const form = new FormData();
        form.append('file', file);
        call('POST', 'image', form);
        event.target.value = '';
      });
      $('style').addEventListener('change', (event) => call('PUT', 'style', { style_id: event.target.value }));
      $('prompt').addEventListener('change', (event) => call('PUT', 'prompt', { text: event.target.value }));
      $('backdrop').addEventListener('change', (event) => call('PUT', 'background/backdrop', { backdrop: event.target.value }));
      $('generate').addEventListener('click', async () => {
        $('generate').disabled = true;
        $('generate').textContent = 'Generating...';
        await call('PUT', 'prompt', { text: $('prompt').value });
        await call('POST', 'generate');
      });

      init();
    </script>
  </body>
</html>
"""
