"""
Terminal reader for the curated feed.

    curated-reader serve           # run the HTML to Markdown service
    curated-reader list            # list curated posts
    curated-reader show 3          # read post #3
"""

import sys

import click

from .config import Config
from .errors import NetworkError, ParseError
from .logging_config import create_execution_logger, setup_structured_logging
from .models import FeedItem
from .rss import FeedProcessor


def format_post_line(index: int, item: FeedItem) -> str:
    return f"{index:>3}. {item.display_creator} - {item.title}"


def format_post_detail(item: FeedItem) -> str:
    published = item.published_at
    date_line = published.strftime("%B %d, %Y") if published else item.pub_date
    lines = [
        item.title,
        "=" * min(len(item.title), 80),
        f"By {item.display_creator}",
        date_line,
        "",
        item.markdown_body,
        "",
        f"Read full post: {item.link}",
    ]
    return "\n".join(lines)


def load_posts(config: Config) -> list[FeedItem]:
    """Fetch posts, falling back to an empty list on feed errors."""
    logger = create_execution_logger("cli")
    processor = FeedProcessor(config.get_fetcher_config(), logger.execution_id)
    try:
        return processor.fetch_posts()
    except (NetworkError, ParseError) as e:
        logger.error(f"Error fetching posts: {e}", error=str(e))
        return []


@click.group()
@click.option("--feed-url", default=None, help="RSS feed to read.")
@click.option("--converter-url", default=None, help="HTML to Markdown service URL.")
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR.")
@click.pass_context
def cli(ctx, feed_url, converter_url, log_level):
    config = Config()
    if feed_url:
        config.feed_url = feed_url
    if converter_url:
        config.converter_url = converter_url
    if log_level:
        config.log_level = log_level
    ctx.obj = config


@cli.command()
@click.option("--host", default=None)
@click.option("--port", type=int, default=None)
@click.pass_obj
def serve(config: Config, host, port):
    """Run the HTML to Markdown conversion service."""
    from .server import run

    server_config = config.get_server_config()
    if host:
        server_config.host = host
    if port:
        server_config.port = port
    run(server_config, config.log_level)


@cli.command(name="list")
@click.pass_obj
def list_posts(config: Config):
    """List the curated posts."""
    setup_structured_logging(config.log_level)
    posts = load_posts(config)
    if not posts:
        click.echo("No posts.")
        sys.exit(1)
    for index, item in enumerate(posts, start=1):
        click.echo(format_post_line(index, item))


@cli.command()
@click.argument("index", type=int)
@click.pass_obj
def show(config: Config, index: int):
    """Show one post (numbered as in `list`)."""
    setup_structured_logging(config.log_level)
    posts = load_posts(config)
    if not 1 <= index <= len(posts):
        raise click.BadParameter(
            f"no post #{index} ({len(posts)} available)", param_hint="INDEX"
        )
    click.echo(format_post_detail(posts[index - 1]))


if __name__ == "__main__":
    cli()
