"""HTML payloads served by the router."""
from __future__ import annotations

import html
from string import Template

from .config import ServerConfig
from .snapshot import ServerInfo

NOT_FOUND_PAGE = "<h1>404 - Page Not Found</h1>"

PIPELINE_STEPS = (
    "📝 Code",
    "📤 Git Push",
    "🔧 Jenkins Build",
    "🐳 Docker Push",
    "🚀 Deploy",
)

TECHNOLOGIES = (
    ("Git/GitHub", "Quản lý source code"),
    ("Jenkins", "CI/CD automation server"),
    ("Docker", "Container platform"),
    ("Docker Hub", "Container registry"),
    ("Python", "Runtime environment"),
)

_STYLE = """
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body {
            font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
            background: linear-gradient(135deg, #0f3443 0%, #34e89e 50%, #43cea2 100%);
            min-height: 100vh;
            display: flex;
            justify-content: center;
            align-items: center;
            padding: 20px;
        }
        .container {
            background: white;
            border-radius: 20px;
            box-shadow: 0 20px 60px rgba(0,0,0,0.3);
            padding: 40px;
            max-width: 800px;
            width: 100%;
        }
        h1 { color: #34e89e; text-align: center; margin-bottom: 10px; font-size: 2.5em; }
        .subtitle { color: #666; text-align: center; margin-bottom: 30px; font-size: 1.2em; }
        .info-card {
            background: #f0fff4;
            border-radius: 10px;
            padding: 20px;
            margin: 15px 0;
            border-left: 4px solid #34e89e;
        }
        .info-card h3 { color: #333; margin-bottom: 10px; }
        .info-card p { color: #666; line-height: 1.6; }
        .pipeline {
            display: flex;
            justify-content: space-around;
            flex-wrap: wrap;
            margin: 30px 0;
            gap: 10px;
        }
        .pipeline-step {
            background: linear-gradient(135deg, #34e89e 0%, #0f3443 100%);
            color: white;
            padding: 15px 25px;
            border-radius: 25px;
            font-weight: bold;
        }
        .server-info { background: #e8f5e9; border-radius: 10px; padding: 20px; margin-top: 20px; }
        .server-info h3 { color: #2e7d32; margin-bottom: 15px; }
        .server-info code {
            background: #c8e6c9;
            padding: 5px 10px;
            border-radius: 5px;
            display: block;
            margin: 5px 0;
        }
        .footer { text-align: center; margin-top: 30px; color: #999; font-size: 0.9em; }
        .version {
            background: linear-gradient(135deg, #34e89e 0%, #0f3443 100%);
            color: white;
            padding: 5px 15px;
            border-radius: 15px;
            display: inline-block;
            margin-top: 10px;
        }
"""

_STATUS_PAGE = Template(
    """<!DOCTYPE html>
<html lang="vi">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>$app_name - CSC11004</title>
    <style>$style</style>
</head>
<body>
    <div class="container">
        <h1>🚀 $app_name</h1>
        <p class="subtitle">Đồ án môn Mạng máy tính nâng cao (CSC11004)</p>

        <div class="info-card">
            <h3>📋 Mô tả dự án</h3>
            <p>Triển khai CI/CD sử dụng Git, Jenkins và Docker.
            Quy trình tự động hóa từ khâu code đến triển khai container.</p>
        </div>

        <div class="pipeline">
$pipeline
        </div>

        <div class="info-card">
            <h3>🛠️ Công nghệ sử dụng</h3>
            <p>
$technologies
            </p>
        </div>

        <div class="server-info">
            <h3>📊 Thông tin Server</h3>
            <code><strong>Hostname:</strong> $hostname</code>
            <code><strong>Timestamp:</strong> $timestamp</code>
            <code><strong>Runtime Version:</strong> $runtime</code>
            <code><strong>Platform:</strong> $platform $arch</code>
        </div>

        <div class="footer">
            <p>© 2026 - Đồ án CI/CD Pipeline</p>
            <span class="version">Version $version</span>
        </div>
    </div>
</body>
</html>
"""
)


def _pipeline_markup() -> str:
    return "\n".join(
        f'            <span class="pipeline-step">{html.escape(step)}</span>'
        for step in PIPELINE_STEPS
    )


def _technology_markup() -> str:
    return "<br>\n".join(
        f"                <strong>• {html.escape(name)}:</strong> {html.escape(role)}"
        for name, role in TECHNOLOGIES
    )


def render_status_page(info: ServerInfo, config: ServerConfig) -> str:
    """Render the home page with ``info`` embedded in the server block."""
    return _STATUS_PAGE.substitute(
        style=_STYLE,
        app_name=html.escape(config.app_name),
        version=html.escape(config.version),
        pipeline=_pipeline_markup(),
        technologies=_technology_markup(),
        hostname=html.escape(info.hostname),
        timestamp=html.escape(info.timestamp),
        runtime=html.escape(info.runtime),
        platform=html.escape(info.platform),
        arch=html.escape(info.arch),
    )
