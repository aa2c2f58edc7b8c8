"""Banner rendering.

Turns a BannerPayload into a self-contained HTML fragment: inline styles, a
collapsible header carrying the severity badge, exception and warning lists
and a job queue stat grid. Every interpolated text field is HTML-escaped.
"""

import html
from collections.abc import Sequence

from .models import BannerPayload, BannerQueueStats, ReportRecord

MAX_ITEMS = 5

STYLES = """<style id="newshound-styles">
  html body { padding-top: 50px; transition: padding-top 0.3s ease-out; }
  .newshound-banner {
    position: fixed; top: 0; left: 0; right: 0; z-index: 10000;
    background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
    color: white; box-shadow: 0 2px 10px rgba(0,0,0,0.3);
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
    font-size: 14px;
  }
  .newshound-header {
    padding: 12px 20px; cursor: pointer; display: flex;
    justify-content: space-between; align-items: center; user-select: none;
  }
  .newshound-title { font-weight: 600; display: flex; align-items: center; gap: 10px; }
  .newshound-badge {
    display: inline-block; padding: 2px 8px; border-radius: 12px;
    font-size: 12px; font-weight: 600; background: rgba(255,255,255,0.2);
  }
  .newshound-error { background: #ef4444; }
  .newshound-warning { background: #f59e0b; }
  .newshound-success { background: #10b981; }
  .newshound-toggle { transition: transform 0.3s; }
  .newshound-banner.newshound-collapsed .newshound-toggle { transform: rotate(-90deg); }
  .newshound-content {
    max-height: 400px; overflow-y: auto;
    border-top: 1px solid rgba(255,255,255,0.2); transition: max-height 0.3s ease-out;
  }
  .newshound-banner.newshound-collapsed .newshound-content {
    max-height: 0; overflow: hidden; border-top: none;
  }
  .newshound-section { padding: 15px 20px; border-bottom: 1px solid rgba(255,255,255,0.1); }
  .newshound-section:last-child { border-bottom: none; }
  .newshound-section-title { font-weight: 600; margin-bottom: 10px; font-size: 15px; }
  .newshound-item {
    background: rgba(255,255,255,0.1); padding: 10px; margin-bottom: 8px;
    border-radius: 6px; font-size: 13px;
  }
  .newshound-item:last-child { margin-bottom: 0; }
  .newshound-item-title { font-weight: 600; margin-bottom: 4px; }
  .newshound-item-detail { opacity: 0.9; font-size: 12px; }
  .newshound-grid {
    display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 10px;
  }
  .newshound-stat {
    background: rgba(255,255,255,0.1); padding: 12px; border-radius: 6px; text-align: center;
  }
  .newshound-stat-value { font-size: 24px; font-weight: 700; display: block; }
  .newshound-stat-label {
    font-size: 11px; opacity: 0.8; text-transform: uppercase; letter-spacing: 0.5px;
  }
</style>"""

# Keeps body padding in sync with the banner height, respecting host pages
# that set padding-top with !important.
SCRIPT = """<script>
  (function() {
    var cachedPriority, cachedBodyRule;

    function detectPriority() {
      var styles = document.querySelectorAll('style:not(#newshound-styles)');
      for (var i = 0; i < styles.length; i++) {
        if (styles[i].textContent.match(/body\\s*{[^}]*padding-top[^;]*!important/)) {
          return 'important';
        }
      }
      try {
        for (var s = 0; s < document.styleSheets.length; s++) {
          var sheet = document.styleSheets[s];
          if (sheet.ownerNode && sheet.ownerNode.id === 'newshound-styles') continue;
          var rules = sheet.cssRules || [];
          for (var r = 0; r < rules.length; r++) {
            if (rules[r].selectorText === 'body' &&
                rules[r].style.getPropertyPriority('padding-top') === 'important') {
              return 'important';
            }
          }
        }
      } catch (e) {}
      return '';
    }

    function findBodyRule() {
      var styleEl = document.getElementById('newshound-styles');
      if (!styleEl || !styleEl.sheet) return null;
      var rules = styleEl.sheet.cssRules;
      for (var i = 0; i < rules.length; i++) {
        if (rules[i].selectorText === 'html body') return rules[i];
      }
      return null;
    }

    window.newshoundUpdatePadding = function() {
      setTimeout(function() {
        var banner = document.getElementById('newshound-banner');
        if (!banner) return;
        if (cachedBodyRule === undefined) cachedBodyRule = findBodyRule();
        if (!cachedBodyRule) return;
        if (cachedPriority === undefined) cachedPriority = detectPriority();
        cachedBodyRule.style.setProperty('padding-top', banner.offsetHeight + 'px', cachedPriority);
      }, 300);
    };

    if (document.readyState === 'loading') {
      document.addEventListener('DOMContentLoaded', window.newshoundUpdatePadding);
    } else {
      window.newshoundUpdatePadding();
    }
    window.addEventListener('resize', window.newshoundUpdatePadding);
  })();
</script>"""


def escape_html(text: object) -> str:
    """Escape & < > " ' for safe embedding; None and blanks become ''."""
    if text is None:
        return ""
    return html.escape(str(text), quote=True)


def _render_item(record: ReportRecord) -> str:
    detail = " • ".join(
        escape_html(part)
        for part in (record.message, record.location, record.time)
        if part
    )
    return (
        '<div class="newshound-item">'
        f'<div class="newshound-item-title">{escape_html(record.title)}</div>'
        f'<div class="newshound-item-detail">{detail}</div>'
        "</div>"
    )


def _render_records(title: str, records: Sequence[ReportRecord]) -> str:
    items = "".join(_render_item(record) for record in records[:MAX_ITEMS])
    return (
        '<div class="newshound-section">'
        f'<div class="newshound-section-title">{title} ({len(records)})</div>'
        f"{items}"
        "</div>"
    )


def render_exceptions(exceptions: Sequence[ReportRecord], window_hours: int = 24) -> str:
    if not exceptions:
        return (
            '<div class="newshound-section">'
            '<div class="newshound-section-title">✅ Exceptions</div>'
            '<div class="newshound-item">No exceptions in the last '
            f'{window_hours} hours</div>'
            "</div>"
        )
    return _render_records("⚠️ Recent Exceptions", exceptions)


def render_warnings(warnings: Sequence[ReportRecord]) -> str:
    if not warnings:
        return ""
    return _render_records("⚠️ Warnings", warnings)


def render_jobs(stats: BannerQueueStats | None) -> str:
    stats = stats or BannerQueueStats()
    cells = "".join(
        '<div class="newshound-stat">'
        f'<span class="newshound-stat-value">{int(value)}</span>'
        f'<span class="newshound-stat-label">{label}</span>'
        "</div>"
        for value, label in (
            (stats.ready, "Ready"),
            (stats.scheduled, "Scheduled"),
            (stats.failed, "Failed"),
            (stats.completed_today, "Completed Today"),
        )
    )
    return (
        '<div class="newshound-section">'
        '<div class="newshound-section-title">📊 Job Queue Status</div>'
        f'<div class="newshound-grid">{cells}</div>'
        "</div>"
    )


def render_banner(payload: BannerPayload) -> str:
    """Render the complete banner fragment."""
    badge = (
        f'<span class="newshound-badge {payload.badge.css_class}">'
        f"{escape_html(payload.badge.text)}</span>"
    )
    toggle = (
        "document.getElementById('newshound-banner')"
        ".classList.toggle('newshound-collapsed'); window.newshoundUpdatePadding();"
    )
    return "\n".join(
        [
            '<div id="newshound-banner" class="newshound-banner newshound-collapsed">',
            STYLES,
            f'<div class="newshound-header" onclick="{toggle}">',
            f'<span class="newshound-title">🐕 Newshound {badge}</span>',
            '<span class="newshound-toggle">▼</span>',
            "</div>",
            '<div class="newshound-content">',
            render_exceptions(payload.exceptions, payload.window_hours),
            render_warnings(payload.warnings),
            render_jobs(payload.queue_stats),
            "</div>",
            "</div>",
            SCRIPT,
        ]
    )
