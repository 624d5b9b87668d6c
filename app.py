#!/usr/bin/env python3
from flask import Flask, Response, render_template_string, request
import logging
import traceback

from config import PRESETS, STYLES, TITLE_VARIANTS, HarmonyConfig
from harmony import GospelHarmony

app = Flask(__name__)
logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10

def parse_limit(value):
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return DEFAULT_LIMIT
    return limit if limit > 0 else None

def build_report(style, title_variant, limit, debug_log):
    config = HarmonyConfig.from_env(style).with_overrides(title_variant=title_variant, limit=limit)
    try:
        return GospelHarmony(config, debug_log).run()
    except Exception as e:
        logger.exception("Report generation failed")
        debug_log.append(f"Error: {e} \n {traceback.format_exc()}")
        return ""

HTML_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <title>Gospel Harmony</title>
    <style>
        body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; max-width: 900px; margin: 40px auto; padding: 0 20px; line-height: 1.6; color: #333; }
        .controls { display: flex; flex-wrap: wrap; gap: 15px; align-items: center; margin-bottom: 25px; background: #eee; padding: 15px; border-radius: 8px; }
        select, input[type="number"] { padding: 8px; border: 1px solid #ccc; border-radius: 4px; }
        button { padding: 10px 25px; cursor: pointer; background-color: #007bff; color: white; border: none; border-radius: 4px; font-weight: bold; }
        .result { background: #f8f9fa; padding: 25px; border-radius: 8px; margin-top: 20px; border-left: 5px solid #007bff; position: relative; }
        .report { white-space: pre-wrap; word-wrap: break-word; font-family: monospace; font-size: 13px; }
        .copy-btn { position: absolute; top: 15px; right: 15px; background: #6c757d; color: white; border: none; font-size: 12px; padding: 6px 12px; border-radius: 4px; cursor: pointer; }
        .debug-box { margin-top: 30px; background: #333; color: #0f0; padding: 15px; font-family: monospace; font-size: 12px; border-radius: 5px; overflow-x: auto; white-space: pre; }
        label { display: flex; align-items: center; gap: 5px; font-weight: 500; }
        #spinner { display: none; margin: 15px 0; font-weight: bold; color: #007bff; }
    </style>
</head>
<body>
    <h2>📖 Gospel Harmony</h2>
    <form id="reportForm" method="POST">
        <div class="controls">
            <label>Style
                <select name="style">{% for s in styles %}<option value="{{ s }}" {% if s == style %}selected{% endif %}>{{ s }}</option>{% endfor %}</select>
            </label>
            <label>Titles
                <select name="titles">{% for t in title_variants %}<option value="{{ t }}" {% if t == title_variant %}selected{% endif %}>{{ t }}</option>{% endfor %}</select>
            </label>
            <label>Pericopes <input type="number" name="limit" min="0" value="{{ limit or 0 }}"></label>
            <button type="submit" id="submitBtn">Generate</button>
        </div>
    </form>
    <div id="spinner">Fetching passages...</div>

    {% if submitted %}
        <div class="result">
            <div class="report" id="report">{{ report }}</div>
            <button class="copy-btn" onclick="copyReport(this)">Copy Markdown</button>
        </div>
        <details>
            <summary><strong>Debug Log</strong></summary>
            <div class="debug-box">{% for log in debug_logs %}{{ log }}
{% endfor %}</div>
        </details>
    {% endif %}
    <script>
        document.getElementById('reportForm').onsubmit = function() {
            document.getElementById('spinner').style.display = 'block';
            document.getElementById('submitBtn').disabled = true;
            document.getElementById('submitBtn').innerText = 'Generating...';
        };
        async function copyReport(btn) {
            try {
                await navigator.clipboard.writeText(document.getElementById('report').innerText);
                var old = btn.innerText; btn.innerText = "Copied!"; setTimeout(() => btn.innerText = old, 2000);
            } catch (err) { console.error(err); btn.innerText = "Error"; }
        }
    </script>
</body>
</html>
"""

@app.route('/', methods=['GET', 'POST'])
def home():
    debug_logs = []
    report = ""
    style = "indented-embed"
    title_variant = PRESETS[style].title_variant
    limit = DEFAULT_LIMIT
    submitted = request.method == 'POST'

    if submitted:
        style = request.form.get('style') if request.form.get('style') in STYLES else style
        title_variant = request.form.get('titles') if request.form.get('titles') in TITLE_VARIANTS else title_variant
        limit = parse_limit(request.form.get('limit'))
        report = build_report(style, title_variant, limit, debug_logs)

    return render_template_string(HTML_TEMPLATE, report=report, debug_logs=debug_logs, submitted=submitted,
                                  style=style, title_variant=title_variant, limit=limit,
                                  styles=STYLES, title_variants=TITLE_VARIANTS)

@app.route('/report.md')
def report_markdown():
    style = request.args.get('style') if request.args.get('style') in STYLES else "indented-embed"
    title_variant = request.args.get('titles') if request.args.get('titles') in TITLE_VARIANTS else None
    limit = parse_limit(request.args.get('limit'))
    report = build_report(style, title_variant, limit, [])
    return Response(report, mimetype='text/markdown')

if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s')
    app.run(host='0.0.0.0', port=5001)
