"""Telegram chat front-end for salesbook.

Each incoming text message is run as one command line and the feedback is
sent back as the reply. Runs instead of the terminal loop, never alongside
it, so there is still exactly one caller mutating the store.

Requires TELEGRAM_TOKEN (from @BotFather) in the environment or .env file.
If not configured, main() logs a message and returns without error.
"""

from telegram import Update
from telegram.ext import ApplicationBuilder, ContextTypes, MessageHandler, filters

from salesbook.config import Config
from salesbook.errors import SalesbookError
from salesbook.main import build_logic

# Telegram rejects messages longer than this
_MAX_REPLY = 4096


def _log(msg):
    print(msg, flush=True)


def _clip(text):
    if len(text) <= _MAX_REPLY:
        return text
    return text[:_MAX_REPLY - 1] + "…"


async def _handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle an incoming Telegram message."""
    text = update.message.text
    if not text:
        return

    user = update.message.from_user
    username = user.first_name or user.username or "unknown"
    source = f"[Telegram:{username}]"

    _log(f"  {source} \"{text}\"")

    logic = context.application.bot_data["logic"]
    try:
        reply = logic.execute(text, source=source).feedback
    except SalesbookError as e:
        reply = str(e)
    except OSError as e:
        reply = f"Could not save data: {e}"

    _log(f"  Response: \"{reply.splitlines()[0] if reply else ''}\"")
    if reply:
        await update.message.reply_text(_clip(reply))


def build_application(token, logic):
    app = ApplicationBuilder().token(token).build()
    app.bot_data["logic"] = logic
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, _handle_message))
    return app


def main(config=None):
    """Run the Telegram bot (blocking).

    Returns True after the bot stops, False if skipped (no token).
    """
    config = config or Config.from_env()
    if not config.telegram_token:
        _log("No TELEGRAM_TOKEN configured; Telegram disabled.")
        return False

    logic = build_logic(config)
    app = build_application(config.telegram_token, logic)
    _log("Telegram bot started.")
    app.run_polling(drop_pending_updates=True)
    return True
