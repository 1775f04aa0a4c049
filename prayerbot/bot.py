import datetime as dt
import logging
import traceback
import uuid
from html import escape
from pathlib import Path

import httpx
from telegram import Update
from telegram.error import TelegramError
from telegram.ext import Application, CommandHandler, ContextTypes

from .card import CardRenderer
from .config import IMAGE_TTL, load_settings
from .config_store import ConfigStore
from .districts import resolve, sample
from .errors import AllApisFailed, NoActiveApis
from .fetcher import PrayerTimeFetcher
from .formatter import MESSAGES, PrayerInfo, render_fallback, render_help, render_text

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

TOMORROW_TOKENS = ("tomorrow", "আগামীকাল")


def target_date(args: list[str], tz, now: dt.datetime | None = None) -> dt.date:
    now = now or dt.datetime.now(tz)
    day = now.astimezone(tz).date()
    if len(args) > 1 and args[1].lower() in TOMORROW_TOKENS:
        day += dt.timedelta(days=1)
    return day


async def _retract(message) -> None:
    try:
        await message.delete()
    except TelegramError as e:
        logger.warning("Could not delete placeholder: %s", e)


async def _remove_card(context: ContextTypes.DEFAULT_TYPE):
    Path(context.job.data).unlink(missing_ok=True)


async def _send_card(message, text: str, image: bytes, cache_dir: Path, job_queue) -> None:
    cache_dir.mkdir(parents=True, exist_ok=True)
    path = cache_dir / f"prayer_{uuid.uuid4().hex}.png"
    path.write_bytes(image)

    try:
        with open(path, "rb") as f:
            await message.reply_photo(photo=f, caption=text)
    finally:
        if job_queue is not None:
            job_queue.run_once(_remove_card, when=IMAGE_TTL, data=str(path))
        else:
            path.unlink(missing_ok=True)


async def handle_ramadan(message, args: list[str], bot_data: dict, job_queue=None) -> None:
    """Answer one /ramadan invocation. Always ends with a reply."""
    store: ConfigStore = bot_data["store"]
    fetcher: PrayerTimeFetcher = bot_data["fetcher"]
    cards: CardRenderer = bot_data["cards"]
    settings = bot_data["settings"]

    placeholder = None
    try:
        snapshot = await store.ensure_loaded()
        if not snapshot.districts:
            await message.reply_text(MESSAGES["no_districts"])
            return

        query = (args[0] if args else "").strip().lower()
        if not query:
            await message.reply_text(
                render_help(sample(snapshot.districts, 10), len(snapshot.districts))
            )
            return

        district = resolve(snapshot.districts, query)
        if district is None:
            await message.reply_text(MESSAGES["not_found"].format(query=query))
            return

        day = target_date(args, settings.timezone)
        placeholder = await message.reply_text(MESSAGES["waiting"].format(district=district.en))

        try:
            times = await fetcher.fetch(district, day.strftime("%d-%m-%Y"))
        except (NoActiveApis, AllApisFailed) as e:
            logger.error("API Error details: %s", e)
            await _retract(placeholder)
            placeholder = None
            await message.reply_text(render_fallback(district, day, snapshot.display))
            return

        info = PrayerInfo(district=district, day=day, times=times)
        is_ramadan = times.is_ramadan
        text = render_text(info, snapshot.display, is_ramadan)

        image = None
        try:
            image = cards.render(info, snapshot.display, is_ramadan)
        except Exception:
            logger.exception("Card error")

        await _retract(placeholder)
        placeholder = None

        if image is None:
            await message.reply_text(text)
            return

        try:
            await _send_card(message, text, image, settings.cache_dir, job_queue)
        except (TelegramError, OSError) as e:
            logger.error("Sending card failed, falling back to text: %s", e)
            await message.reply_text(text)

    except Exception:
        logger.exception("Main error")
        if placeholder is not None:
            await _retract(placeholder)
        await message.reply_text(MESSAGES["apology"])


async def ramadan_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await handle_ramadan(
        update.effective_message, context.args or [], context.application.bot_data, context.job_queue
    )


async def help_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE):
    store: ConfigStore = context.application.bot_data["store"]
    districts = (await store.ensure_loaded()).districts
    await update.effective_message.reply_text(render_help(sample(districts, 10), len(districts)))


async def heartbeat(context: ContextTypes.DEFAULT_TYPE):
    tz = context.application.bot_data["settings"].timezone
    logger.info("✅ Bot is alive - %s", dt.datetime.now(tz).strftime("%I:%M %p"))


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log the error and send a telegram message to notify the developer."""
    logger.error("Exception while handling an update:", exc_info=context.error)
    admin_id = context.application.bot_data["settings"].admin_id
    if not admin_id:
        return

    tb_list = traceback.format_exception(None, context.error, context.error.__traceback__)
    tb_string = "".join(tb_list)
    message = (
        f"An exception was raised while handling an update\n"
        f"<pre>{escape(tb_string[-4000:])}</pre>"
    )
    try:
        await context.bot.send_message(chat_id=admin_id, text=message, parse_mode="HTML")
    except TelegramError as e:
        logger.warning("Could not notify admin: %s", e)


async def post_init(app: Application):
    settings = app.bot_data["settings"]
    client = httpx.AsyncClient(follow_redirects=True)
    store = ConfigStore(settings, client)

    app.bot_data["client"] = client
    app.bot_data["store"] = store
    app.bot_data["fetcher"] = PrayerTimeFetcher(client, store)

    await store.load_all()

    if app.job_queue is not None:
        app.job_queue.run_repeating(heartbeat, interval=settings.heartbeat_seconds, name="heartbeat")

    logger.info("🤖 Ramadan Bot is running...")
    logger.info("📅 Current time: %s", dt.datetime.now(settings.timezone).strftime("%d %B %Y, %I:%M %p"))


async def post_shutdown(app: Application):
    client = app.bot_data.get("client")
    if client is not None:
        await client.aclose()


def main():
    settings = load_settings()
    if not settings.token:
        raise RuntimeError("TELEGRAM_BOT_TOKEN is not set.")
    if not settings.admin_id:
        logger.warning("ADMIN_ID not set in .env")

    app = (
        Application.builder()
        .token(settings.token)
        .post_init(post_init)
        .post_shutdown(post_shutdown)
        .build()
    )
    app.bot_data["settings"] = settings
    app.bot_data["cards"] = CardRenderer(
        enabled=settings.render_card,
        font_path=settings.font_path,
        font_bold_path=settings.font_bold_path,
    )

    app.add_handler(CommandHandler(["ramadan", "Ramadan", "namaz"], ramadan_cmd))
    app.add_handler(CommandHandler(["start", "help", "Help"], help_cmd))
    app.add_error_handler(error_handler)

    logger.info("⏳ Waiting for commands...")
    app.run_polling(close_loop=False)


if __name__ == "__main__":
    main()
