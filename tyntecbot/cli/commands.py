"""tyntecbot 的 CLI 命令。"""

import asyncio
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from tyntecbot import __version__, __logo__

app = typer.Typer(
    name="tyntecbot",
    help=f"{__logo__} tyntecbot - 通过 tyntec 发送 WhatsApp 模板消息",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} tyntecbot v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """tyntecbot - 通过 tyntec 发送 WhatsApp 模板消息。"""
    pass


# ============================================================================
# Onboard / Status
# ============================================================================


@app.command()
def onboard():
    """初始化 tyntecbot 配置。"""
    from tyntecbot.config.loader import get_config_path, save_config
    from tyntecbot.config.schema import Config

    config_path = get_config_path()

    if config_path.exists():
        console.print(f"[yellow]配置已存在于 {config_path}[/yellow]")
        if not typer.confirm("覆盖？"):
            raise typer.Exit()

    save_config(Config(), config_path)
    console.print(f"[green]✓[/green] 已在 {config_path} 创建配置")

    console.print(f"\n{__logo__} tyntecbot 已就绪！")
    console.print("\n后续步骤：")
    console.print("  1. 将您的 tyntec API 密钥和 WhatsApp Business 号码添加到 [cyan]~/.tyntecbot/config.json[/cyan]")
    console.print("  2. 发送：[cyan]tyntecbot send 491701234567 --template-id welcome[/cyan]")


@app.command()
def status():
    """显示 tyntecbot 配置状态。"""
    from tyntecbot.config.loader import get_config_path, load_config

    config_path = get_config_path()
    config = load_config()

    table = Table(title="tyntecbot Status")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="yellow")

    table.add_row("Config", f"{config_path} {'✓' if config_path.exists() else '✗'}")
    ty = config.tyntec
    api_key = "[green]configured[/green]" if ty.api_key else "[dim]not configured[/dim]"
    table.add_row("API key", api_key)
    table.add_row("WABA number", ty.waba_number or "[dim]not configured[/dim]")
    table.add_row("API base", ty.api_base)
    table.add_row("Timeout", f"{ty.timeout}s")

    console.print(table)


# ============================================================================
# Send
# ============================================================================


@app.command()
def send(
    to: str = typer.Argument(..., help="目标 WhatsApp 号码，例如 491701234567"),
    template_id: str = typer.Option(..., "--template-id", "-t", help="已注册模板的 ID"),
    language: str = typer.Option("en", "--language", "-l", help="模板语言"),
    params: Optional[List[str]] = typer.Option(None, "--param", "-p", help="正文文本替换（按顺序，可重复）"),
):
    """发送一条 WhatsApp 模板消息。"""
    import httpx

    from tyntecbot.bot.activity import message_activity
    from tyntecbot.config.loader import load_config
    from tyntecbot.errors import TyntecBotError
    from tyntecbot.tyntec.adapter import TyntecWhatsAppAdapter
    from tyntecbot.tyntec.client import TyntecClient

    config = load_config()
    try:
        settings = config.adapter_settings()
    except ValueError as e:
        console.print(f"[red]错误：{e}[/red]")
        console.print("在 ~/.tyntecbot/config.json 的 tyntec 部分下设置")
        raise typer.Exit(1)

    client = TyntecClient(
        settings.tyntec_apikey,
        api_base=config.tyntec.api_base,
        timeout=config.tyntec.timeout,
    )
    adapter = TyntecWhatsAppAdapter(settings, client=client)

    activity = message_activity(
        channel_data={
            "whatsApp": to,
            "template": {
                "templateId": template_id,
                "templateLanguage": language,
                "components": {
                    "body": [{"type": "text", "text": p} for p in params or []],
                },
            },
        }
    )

    try:
        responses = asyncio.run(adapter.send_activities(None, [activity]))
    except (TyntecBotError, httpx.HTTPError) as e:
        console.print(f"[red]发送失败：{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] 已发送，消息 ID：{responses[0].id}")


if __name__ == "__main__":
    app()
