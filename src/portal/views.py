"""
Portal Views
Server-side HTML for the DNI lookup page and its results region.

The page works without JavaScript (plain GET form). With JavaScript, the
form fetches only the results fragment from /search and ignores any
response that is not for the most recent request.
"""
from datetime import datetime
from html import escape
from string import Template

import config
from portal.search import SearchPhase, SearchState
from tracker.progress import STATUS_STYLES, ProgressTracker, TrackerStep


VW_LOGO_SVG = """<svg class="logo" viewBox="0 0 100 100" fill="none" stroke="currentColor" stroke-width="5" aria-label="Logo">
  <circle cx="50" cy="50" r="45"/>
  <path d="M22 30 L38 72 L50 44 L62 72 L78 30" stroke-linejoin="round"/>
  <path d="M34 22 L50 56 L66 22" stroke-linejoin="round"/>
</svg>"""

ICONS = {
    'check': """<svg class="icon" fill="none" viewBox="0 0 24 24" stroke="#ffffff" stroke-width="3"><path stroke-linecap="round" stroke-linejoin="round" d="M5 13l4 4L19 7"/></svg>""",
    'clock': """<svg class="icon" fill="none" viewBox="0 0 24 24" stroke="#cbd5e1" stroke-width="2"><path stroke-linecap="round" stroke-linejoin="round" d="M12 8v4l3 3m6-3a9 9 0 11-18 0 9 9 0 0118 0z"/></svg>""",
    'spinner': """<span class="spinner" role="status" aria-label="En curso"></span>""",
}

PAGE_TEMPLATE = Template("""<!DOCTYPE html>
<html lang="es">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>$title</title>
<style>
  * { margin: 0; padding: 0; box-sizing: border-box; }
  body {
    font-family: 'Segoe UI', system-ui, -apple-system, sans-serif;
    background: #0f172a;
    color: #e2e8f0;
    min-height: 100vh;
    display: flex;
    flex-direction: column;
    align-items: center;
    justify-content: center;
    padding: 16px;
  }
  .wrap { width: 100%; max-width: 768px; margin: 0 auto; }
  header { display: flex; justify-content: center; margin-bottom: 32px; }
  .logo { width: 96px; height: 96px; color: #cbd5e1; }
  main {
    background: rgba(30, 41, 59, 0.5);
    border: 1px solid #334155;
    border-radius: 16px;
    padding: 32px;
    box-shadow: 0 25px 50px -12px rgba(0, 0, 0, 0.5);
  }
  .intro { text-align: center; margin-bottom: 24px; }
  .intro h1 { font-size: 32px; font-weight: 700; color: #f1f5f9; }
  .intro p { margin-top: 8px; font-size: 18px; color: #94a3b8; }
  form { display: flex; gap: 16px; flex-wrap: wrap; }
  form input {
    flex: 1 1 240px;
    background: rgba(15, 23, 42, 0.8);
    border: 1px solid #475569;
    border-radius: 6px;
    padding: 12px 16px;
    color: #e2e8f0;
    font-size: 16px;
  }
  form button {
    background: #2563eb;
    color: #ffffff;
    font-weight: 700;
    border: none;
    border-radius: 6px;
    padding: 12px 24px;
    font-size: 16px;
    cursor: pointer;
    display: flex;
    align-items: center;
    justify-content: center;
    gap: 8px;
  }
  form button:hover { background: #3b82f6; }
  form input:disabled, form button:disabled { opacity: 0.5; cursor: not-allowed; }
  #results { margin-top: 32px; min-height: 250px; }
  .error-banner {
    background: rgba(239, 68, 68, 0.1);
    border: 1px solid rgba(239, 68, 68, 0.3);
    color: #fca5a5;
    padding: 16px;
    border-radius: 8px;
    text-align: center;
  }
  .empty-state { color: #64748b; text-align: center; padding: 48px 0; }
  .result > * + * { margin-top: 24px; }
  .summary {
    background: rgba(51, 65, 85, 0.5);
    border: 1px solid #475569;
    border-radius: 8px;
    padding: 24px;
    font-size: 18px;
    color: #e2e8f0;
    text-align: center;
  }
  .tracker-card {
    background: rgba(15, 23, 42, 0.5);
    border: 1px solid #334155;
    border-radius: 8px;
    padding: 24px;
    overflow-x: auto;
  }
  .tracker-card h3 { font-size: 20px; font-weight: 600; color: #e2e8f0; text-align: center; margin-bottom: 24px; }
  .tracker { display: flex; align-items: center; }
  .step { display: flex; flex-direction: column; align-items: center; text-align: center; min-width: 110px; }
  .step-ring {
    width: 64px; height: 64px; border-radius: 50%;
    display: flex; align-items: center; justify-content: center;
    border: 1px solid;
  }
  .step-dot {
    width: 48px; height: 48px; border-radius: 50%;
    display: flex; align-items: center; justify-content: center;
  }
  .step h4 { margin-top: 12px; font-weight: 700; color: #e2e8f0; }
  .step p { font-size: 14px; text-transform: capitalize; }
  .connector { flex: 1; height: 4px; margin: 0 8px; }
  .icon { width: 24px; height: 24px; }
  .spinner {
    width: 20px; height: 20px;
    border: 3px solid rgba(255, 255, 255, 0.35);
    border-top-color: #ffffff;
    border-radius: 50%;
    display: inline-block;
    animation: spin 0.8s linear infinite;
  }
  @keyframes spin { to { transform: rotate(360deg); } }
  .identity { text-align: center; border-top: 1px solid #334155; padding-top: 16px; color: #94a3b8; }
  .identity span { font-weight: 600; color: #e2e8f0; }
  footer { text-align: center; padding: 16px 0; margin-top: 32px; color: #64748b; font-size: 14px; }
</style>
</head>
<body>
<div class="wrap">
  <header>$logo</header>
  <main>
    <div class="intro">
      <h1>$title</h1>
      <p>$subtitle</p>
    </div>
    <form id="searchForm" method="get" action="/" data-empty-message="$empty_message" data-failed-message="$failed_message">
      <input id="dniInput" type="text" name="dni" value="$dni" placeholder="Ingrese su DNI sin puntos" autocomplete="off"$disabled>
      <button id="searchButton" type="submit"$disabled>$button</button>
    </form>
    <div id="results">$results</div>
  </main>
</div>
<footer><p>&copy; $year $company. Todos los derechos reservados.</p></footer>
<script>
  (function() {
    var form = document.getElementById('searchForm');
    var input = document.getElementById('dniInput');
    var button = document.getElementById('searchButton');
    var results = document.getElementById('results');
    var idleLabel = 'Buscar';
    var latest = 0;

    function banner(message) {
      var div = document.createElement('div');
      div.className = 'error-banner';
      div.textContent = message;
      results.innerHTML = '';
      results.appendChild(div);
    }

    function setLoading(loading) {
      input.disabled = loading;
      button.disabled = loading;
      button.innerHTML = loading ? '<span class="spinner"></span> Buscando...' : idleLabel;
    }

    form.addEventListener('submit', function(e) {
      e.preventDefault();
      var dni = input.value.trim();
      var requestId = ++latest;
      if (!dni) {
        setLoading(false);
        banner(form.dataset.emptyMessage);
        return;
      }
      results.innerHTML = '';
      setLoading(true);
      fetch('/search?dni=' + encodeURIComponent(dni) + '&request_id=' + requestId)
        .then(function(resp) {
          if (!resp.ok) throw new Error('HTTP ' + resp.status);
          return resp.text();
        })
        .then(function(html) {
          if (requestId !== latest) return;
          results.innerHTML = html;
        })
        .catch(function(err) {
          if (requestId !== latest) return;
          console.error(err);
          banner(form.dataset.failedMessage);
        })
        .then(function() {
          if (requestId === latest) setLoading(false);
        });
    });
  })();
</script>
</body>
</html>""")

STEP_TEMPLATE = Template("""<div class="step" data-step="$key" data-status="$status">
  <div class="step-ring" style="border-color: $ring; background: $ring_bg;">
    <div class="step-dot" style="background: $color;">$icon</div>
  </div>
  <h4>$label</h4>
  <p style="color: $text;">$detail</p>
</div>""")

CONNECTOR_TEMPLATE = Template(
    """<div class="connector" data-status="$status" style="background: $color;"></div>"""
)


def render_step(step: TrackerStep) -> str:
    style = STATUS_STYLES[step.status]
    return STEP_TEMPLATE.substitute(
        key=escape(step.key),
        status=step.status.value,
        ring=style['ring'],
        ring_bg=style['ring'].replace('0.5)', '0.2)'),
        color=style['color'],
        icon=ICONS[style['icon']],
        label=escape(step.label),
        text=style['text'],
        detail=escape(step.detail),
    )


def render_tracker(tracker: ProgressTracker) -> str:
    """Steps left to right with a connector between each pair."""
    parts = []
    for i, step in enumerate(tracker.steps):
        if i > 0:
            connector = tracker.connectors[i - 1]
            parts.append(CONNECTOR_TEMPLATE.substitute(
                status=connector.status.value,
                color=connector.color,
            ))
        parts.append(render_step(step))
    return '<div class="tracker">' + ''.join(parts) + '</div>'


def render_results(state: SearchState) -> str:
    """
    Render the results region.

    Exactly one of: error banner, empty state, populated result card.
    Loading renders nothing; the busy indicator lives in the search button.
    """
    if state.phase is SearchPhase.ERROR:
        return f'<div class="error-banner" role="alert">{escape(state.error or config.MSG_SEARCH_FAILED)}</div>'

    if state.phase is SearchPhase.RESULT and state.customer is not None:
        customer = state.customer
        parts = ['<div class="result">']
        if state.summary:
            parts.append(f'<div class="summary"><p>{escape(state.summary)}</p></div>')
        if state.tracker is not None:
            parts.append(
                '<div class="tracker-card"><h3>Estado del Proceso</h3>'
                + render_tracker(state.tracker)
                + '</div>'
            )
        parts.append(
            '<div class="identity">'
            f'<p>Cliente: <span class="customer-name">{escape(customer.customer_name)}</span></p>'
            f'<p>Asesor: <span class="salesperson">{escape(customer.salesperson)}</span></p>'
            '</div>'
        )
        parts.append('</div>')
        return ''.join(parts)

    if state.phase is SearchPhase.LOADING:
        return ''

    return '<div class="empty-state">Ingrese su DNI para ver el estado de su vehículo.</div>'


def render_page(state: SearchState = None) -> str:
    """Render the full portal page for a state (IDLE when omitted)."""
    state = state or SearchState()
    loading = state.is_loading

    if loading:
        button = ICONS['spinner'] + ' Buscando...'
    else:
        button = 'Buscar'

    return PAGE_TEMPLATE.substitute(
        title=escape(config.PORTAL_TITLE),
        subtitle=escape(config.PORTAL_SUBTITLE),
        logo=VW_LOGO_SVG,
        empty_message=escape(config.MSG_EMPTY_DNI),
        failed_message=escape(config.MSG_SEARCH_FAILED),
        dni=escape(state.dni),
        disabled=' disabled' if loading else '',
        button=button,
        results=render_results(state),
        year=datetime.now().year,
        company=escape(config.PORTAL_COMPANY_NAME),
    )
