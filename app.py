"""
Flask web application for the CallOS savings calculator.

Single-file app using render_template_string.  Run via ``python main.py``
which starts the dev server on localhost:5000.  The page keeps no state
between requests: the last accepted value of every field travels back
in hidden ``prev_*`` inputs.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

from flask import Flask, abort, render_template_string, request

import config as cfg
from estimator import (
    SavingsInputs,
    coerce_count,
    estimate_savings,
    parameter_sweep,
    resolve_weeks_per_month,
    team_size_table,
)
from cli import compute_display_data, format_factor
import report

app = Flask(__name__)

FIELDS = list(cfg.DEFAULT_INPUTS)

LABELS = {
    "salespeople": "Ilość handlowców",
    "calls_per_week": "Ilość rozmów tygodniowo (na handlowca)",
    "call_duration": "Czas jednej rozmowy (minuty)",
    "crm_time": "Czas na uzupełnienie CRM (notatka, pola, zadania) i draft (minuty)",
    "hourly_cost": "Koszt godziny handlowca (PLN)",
}

# ═══════════════════════════════════════════════════════════════════
# Form parsing
# ═══════════════════════════════════════════════════════════════════

def parse_form(form: Dict[str, Any]) -> Tuple[SavingsInputs, float]:
    """Parse the HTML form into SavingsInputs and the weeks-per-month factor.

    Malformed text keeps the previously accepted value for that field.
    Raises ValueError for an unusable weeks-per-month factor.
    """
    values = {}
    for name in FIELDS:
        prior = coerce_count(form.get(f"prev_{name}"), cfg.DEFAULT_INPUTS[name])
        values[name] = coerce_count(form.get(name), prior)
    wpm = resolve_weeks_per_month(form.get("wpm", cfg.WEEKS_PER_MONTH))
    return SavingsInputs(**values), wpm


def _render(inputs: SavingsInputs, wpm: float):
    results = estimate_savings(inputs, wpm)
    team = team_size_table(inputs, weeks_per_month=wpm)
    sweep = parameter_sweep(inputs, weeks_per_month=wpm)
    d = compute_display_data(inputs, results, team)
    charts = report.get_web_charts(inputs, results, team, sweep)
    return render_template_string(
        HTML_TEMPLATE,
        d=d,
        fields=FIELDS,
        labels=LABELS,
        wpm_choices=[(w, format_factor(w)) for w in cfg.WEEKS_PER_MONTH_CHOICES],
        charts=charts,
        demo_url=cfg.DEMO_URL,
    )


# ═══════════════════════════════════════════════════════════════════
# HTML Template
# ═══════════════════════════════════════════════════════════════════

HTML_TEMPLATE = r"""
<!DOCTYPE html>
<html lang="pl">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Kalkulator Oszczędności CallOS</title>
<link rel="preconnect" href="https://fonts.googleapis.com">
<link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700;800&display=swap" rel="stylesheet">
<style>
  *{margin:0;padding:0;box-sizing:border-box}

  :root{
    --bg-deep:#050816;
    --bg-surface:rgba(15,23,42,0.55);
    --bg-input:rgba(8,11,22,0.85);
    --border-subtle:rgba(99,102,241,0.1);
    --border-hover:rgba(99,102,241,0.25);
    --text-primary:#f1f5f9;
    --text-secondary:#94a3b8;
    --text-muted:#64748b;
    --indigo:#818cf8;
    --indigo-deep:#6366f1;
    --violet:#8b5cf6;
    --emerald:#34d399;
    --radius-lg:16px;
    --radius-md:10px;
  }

  body{
    background:var(--bg-deep);color:var(--text-primary);
    font-family:'Inter',system-ui,-apple-system,sans-serif;
    line-height:1.6;min-height:100vh;
  }

  .container{max-width:1140px;margin:0 auto;padding:2rem 1.5rem}

  /* ── hero header ── */
  .hero{text-align:center;padding:1.5rem 0 2.5rem}
  .hero-icon{
    display:inline-flex;align-items:center;justify-content:center;
    width:64px;height:64px;border-radius:18px;margin-bottom:1.2rem;
    background:rgba(99,102,241,.12);color:var(--indigo);
  }
  .hero h1{
    font-size:clamp(1.6rem,4vw,2.6rem);font-weight:800;
    letter-spacing:-.035em;line-height:1.15;
    background:linear-gradient(135deg,#e2e8f0 0%,#818cf8 45%,#34d399 100%);
    -webkit-background-clip:text;-webkit-text-fill-color:transparent;
    background-clip:text;
  }
  .hero-sub{color:var(--text-secondary);margin:.8rem auto 0;max-width:640px;font-size:.98rem}

  /* ── cards ── */
  .grid-2{display:grid;grid-template-columns:1fr 1fr;gap:1.4rem}
  @media(max-width:860px){.grid-2{grid-template-columns:1fr}}
  .card{
    background:var(--bg-surface);
    border:1px solid var(--border-subtle);
    border-radius:var(--radius-lg);padding:1.8rem;
    margin-bottom:1.4rem;position:relative;overflow:hidden;
    transition:border-color .3s;
  }
  .card:hover{border-color:var(--border-hover)}
  h2{font-size:1.3rem;font-weight:700;letter-spacing:-.015em}
  .card-sub{color:var(--text-secondary);font-size:.86rem;margin-bottom:1.4rem}

  /* ── form ── */
  .form-group{display:flex;flex-direction:column;margin-bottom:1.1rem}
  .form-group label{font-size:.86rem;font-weight:600;margin-bottom:.35rem}
  .form-group input,.form-group select{
    background:var(--bg-input);
    border:1px solid rgba(71,85,105,.35);border-radius:var(--radius-md);
    color:var(--text-primary);padding:.7rem .9rem;font-size:1rem;
    font-family:inherit;transition:border-color .25s,box-shadow .25s;
  }
  .form-group input:focus,.form-group select:focus{
    outline:none;border-color:var(--indigo-deep);
    box-shadow:0 0 0 3px rgba(99,102,241,.12);
  }

  /* ── result tiles ── */
  .tile{background:rgba(8,11,22,.55);border-radius:var(--radius-md);padding:1.1rem 1.2rem;margin-bottom:.9rem}
  .tile-label{font-size:.8rem;color:var(--text-secondary);font-weight:600}
  .tile-value{font-size:1.5rem;font-weight:800;font-variant-numeric:tabular-nums}
  .tile-note{font-size:.8rem;color:var(--text-secondary);margin-top:.3rem}
  .tile-money .tile-value{color:var(--emerald)}
  .tile-time .tile-value{color:var(--indigo)}
  .fineprint{font-size:.72rem;color:var(--text-muted);text-align:center;margin-top:.6rem}

  /* ── team table ── */
  .table-wrap{overflow-x:auto;border-radius:var(--radius-md);border:1px solid rgba(51,65,85,.25)}
  .team-table{width:100%;border-collapse:collapse;font-size:.86rem}
  .team-table th{
    text-align:left;padding:.65rem .8rem;background:rgba(15,23,42,.45);
    color:var(--text-secondary);font-size:.76rem;text-transform:uppercase;letter-spacing:.05em;
  }
  .team-table td{padding:.5rem .8rem;border-bottom:1px solid rgba(51,65,85,.15);font-variant-numeric:tabular-nums}
  .team-table .current-row td{background:rgba(16,185,129,.07);font-weight:600}

  /* ── charts ── */
  .chart-img{width:100%;border-radius:var(--radius-md);margin-top:.6rem}

  /* ── problem / solution ── */
  .pitch{display:grid;grid-template-columns:1fr 1fr;gap:0;padding:0}
  @media(max-width:860px){.pitch{grid-template-columns:1fr}}
  .pitch > div{padding:2rem}
  .pitch h3{font-size:1.35rem;font-weight:800;margin-bottom:1.1rem}
  .pitch h4{font-size:.95rem;font-weight:700;margin:1rem 0 .5rem}
  .pitch ul{list-style:none}
  .pitch li{display:flex;gap:.5rem;margin-bottom:.45rem;color:var(--text-secondary);font-size:.92rem}
  .pitch .solution li,.pitch .solution p{color:var(--text-primary)}
  .pitch .solution{background:linear-gradient(135deg,rgba(99,102,241,.28),rgba(139,92,246,.18))}
  .pitch .arrows{border-top:1px solid rgba(241,245,249,.15);padding-top:1rem;margin-top:1.2rem}
  .pitch .arrows p{font-weight:600;margin-bottom:.4rem}
  .btn{
    display:inline-block;margin-top:1.4rem;padding:.75rem 1.6rem;
    border-radius:var(--radius-md);background:var(--text-primary);color:#0f172a;
    font-weight:700;text-decoration:none;transition:transform .2s;
  }
  .btn:hover{transform:translateY(-2px)}

  .footer{text-align:center;color:var(--text-muted);font-size:.75rem;padding:2rem 0 1rem}
</style>
</head>
<body>
<div class="container">

<div class="hero">
  <div class="hero-icon">
    <svg width="30" height="30" fill="none" viewBox="0 0 24 24" stroke="currentColor" stroke-width="2"><rect x="4" y="2" width="16" height="20" rx="2"/><path d="M8 6h8M8 10h.01M12 10h.01M16 10h.01M8 14h.01M12 14h.01M16 14h.01M8 18h.01M12 18h4"/></svg>
  </div>
  <h1>Kalkulator Oszczędności CallOS</h1>
  <p class="hero-sub">Oblicz, ile czasu i pieniędzy odzyskasz, gdy CallOS automatycznie wypełni CRM i przygotuje podsumowania rozmów za Twój zespół</p>
</div>

<div class="grid-2">

<!-- Inputs -->
<div class="card">
  <h2>Dane wejściowe</h2>
  <p class="card-sub">Podaj informacje o swojej firmie</p>
  <form method="POST" id="calc-form">
    {% for name in fields %}
    <div class="form-group">
      <label for="{{ name }}">{{ labels[name] }}</label>
      <input type="number" min="1" id="{{ name }}" name="{{ name }}"
             value="{{ '' if d[name] == 0 else d[name] }}">
    </div>
    {% endfor %}
    <div class="form-group">
      <label for="wpm">Tygodni w miesiącu</label>
      <select id="wpm" name="wpm">
        {% for value, label in wpm_choices %}
        <option value="{{ value }}" {% if value == d.weeks_per_month %}selected{% endif %}>{{ label }}</option>
        {% endfor %}
      </select>
    </div>
    <div id="prev-fields">
      {% for name in fields %}
      <input type="hidden" name="prev_{{ name }}" value="{{ d[name] }}">
      {% endfor %}
    </div>
    <noscript><button type="submit" class="btn">Przelicz</button></noscript>
  </form>
</div>

<!-- Results -->
<div class="card" id="results">
  <h2>Wyniki</h2>
  <p class="card-sub">Twoje potencjalne oszczędności</p>

  <div class="tile">
    <div class="tile-label">Liczba rozmów miesięcznie</div>
    <div class="tile-value">{{ d.calls_month }}</div>
  </div>
  <div class="tile">
    <div class="tile-label">Czas wprowadzania do CRM i draft (miesięcznie)</div>
    <div class="tile-value">{{ d.manual_month }}</div>
  </div>
  <div class="tile tile-time">
    <div class="tile-label">Oszczędność czasu</div>
    <div class="tile-value">{{ d.saved_week }} / tydzień</div>
    <div class="tile-value">{{ d.saved_month }} / miesiąc</div>
    <div class="tile-note">({{ d.saved_month_hours }} miesięcznie)</div>
  </div>
  <div class="tile tile-money">
    <div class="tile-label">Oszczędność finansowa</div>
    <div class="tile-value">{{ d.money_week }} / tydzień</div>
    <div class="tile-value">{{ d.money_month }} / miesiąc</div>
    <div class="tile-value">{{ d.money_year }} / rok</div>
  </div>
  <p class="fineprint">Kalkulacja oparta na rzeczywistych danych z wdrożeń CallOS. Nie uwzględnia dodatkowych korzyści: lepszej jakości danych w CRM, automatycznego feedbacku dla zespołu i przygotowanych podsumowań dla klientów</p>

  <div id="results-extra">
    <h2 style="margin-top:1.6rem">Oszczędności a wielkość zespołu</h2>
    <div class="table-wrap" style="margin-top:.8rem">
      <table class="team-table">
        <thead><tr><th>Handlowcy</th><th>Czas / miesiąc</th><th>PLN / miesiąc</th><th>PLN / rok</th></tr></thead>
        <tbody>
        {% for r in d.team %}
          <tr class="{{ 'current-row' if r.current else '' }}">
            <td>{{ r.salespeople }}</td><td>{{ r.saved_month }}</td><td>{{ r.money_month }}</td><td>{{ r.money_year }}</td>
          </tr>
        {% endfor %}
        </tbody>
      </table>
    </div>
    {% for img in charts %}
    <img class="chart-img" src="data:image/png;base64,{{ img }}" alt="Wykres {{ loop.index }}">
    {% endfor %}
  </div>
</div>

</div>

<!-- Problem / solution -->
<div class="card pitch">
  <div>
    <h3>Znasz to?</h3>
    <h4>Twoi handlowcy:</h4>
    <ul>
      <li><span>❌</span><span>Tracą godziny na wypełnianie CRM</span></li>
      <li><span>❌</span><span>Zapominają o follow-upach</span></li>
      <li><span>❌</span><span>Nie dostają systematycznego feedbacku</span></li>
    </ul>
    <h4>A Ty:</h4>
    <ul>
      <li><span>❌</span><span>Nie masz czasu słuchać wszystkich rozmów</span></li>
      <li><span>❌</span><span>Nie wiesz dlaczego leady się nie zamykają</span></li>
      <li><span>❌</span><span>Tracisz deals przez słabą dokumentację</span></li>
    </ul>
  </div>
  <div class="solution">
    <h3>CallOS rozwiązuje to wszystko automatycznie:</h3>
    <ul>
      <li><span>✅</span><span>CRM wypełnia się sam po każdej rozmowie</span></li>
      <li><span>✅</span><span>Gotowe emaile i zadania dla handlowców</span></li>
      <li><span>✅</span><span>Spersonalizowany feedback oparty na Twoim procesie sprzedaży</span></li>
      <li><span>✅</span><span>Dashboard pokazujący jakość rozmów zespołu</span></li>
    </ul>
    <div class="arrows">
      <p>→ Zespół skupia się na sprzedaży, nie dokumentacji</p>
      <p>→ Ty masz pełną kontrolę bez mikromanagementu</p>
    </div>
    <a class="btn" href="{{ demo_url }}" target="_blank" rel="noopener noreferrer">Zobacz jak to działa - demo 10 min</a>
  </div>
</div>

<div class="footer">CallOS &middot; kalkulator oszczędności</div>
</div>

<script>
/* Recompute on every edit: post the form, swap in the new results panel */
(function(){
  var form=document.getElementById('calc-form');
  if(!form||!window.fetch) return;
  var timer=null;
  function recompute(){
    fetch('/',{method:'POST',body:new FormData(form)})
      .then(function(r){ return r.ok ? r.text() : null; })
      .then(function(html){
        if(!html) return;
        var doc=new DOMParser().parseFromString(html,'text/html');
        ['results','prev-fields'].forEach(function(id){
          var fresh=doc.getElementById(id);
          var old=document.getElementById(id);
          if(fresh&&old) old.innerHTML=fresh.innerHTML;
        });
      });
  }
  form.addEventListener('input',function(){
    clearTimeout(timer);
    timer=setTimeout(recompute,250);
  });
  form.addEventListener('submit',function(e){ e.preventDefault(); recompute(); });
})();
</script>
</body>
</html>
"""


# ═══════════════════════════════════════════════════════════════════
# Routes
# ═══════════════════════════════════════════════════════════════════

@app.route("/", methods=["GET", "POST"])
def index():
    if request.method == "GET":
        return _render(SavingsInputs(), cfg.WEEKS_PER_MONTH)

    # POST — recompute from the submitted form
    try:
        inputs, wpm = parse_form(request.form.to_dict())
    except ValueError as e:
        abort(400, description=str(e))
    app.logger.debug("recomputing savings for %s (weeks/month=%s)", inputs, wpm)
    return _render(inputs, wpm)


@app.errorhandler(400)
def bad_request(e):
    return f"Niepoprawne dane: {e.description}", 400


# ═══════════════════════════════════════════════════════════════════
# Entry point
# ═══════════════════════════════════════════════════════════════════

def run_web(debug: bool = True) -> None:
    """Start the Flask development server and open browser."""
    import webbrowser
    import threading

    print("Starting web app at http://localhost:5000")
    threading.Timer(1.0, lambda: webbrowser.open("http://localhost:5000")).start()
    app.run(host="127.0.0.1", port=5000, debug=debug)


if __name__ == "__main__":
    run_web()
