"""Command-line interface for the email identity resolver.

Entry point: `eid` command (defined in pyproject.toml).
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from email_identity.config import Config

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Email Identity Resolution."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = Config()


@main.command()
@click.argument("emails", type=click.Path(), required=False)
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default=None,
    help="Where to write the chains JSON (default: data/chains.json)",
)
@click.option(
    "--num-workers",
    "-w",
    type=int,
    default=None,
    help="Number of parallel CoreNLP requests (default: from config)",
)
@click.pass_context
def annotate(ctx: click.Context, emails: str | None, output: str | None, num_workers: int | None) -> None:
    """Run CoreNLP coreference over every email body and save the chains.

    \b
    Examples:
        eid annotate                        # data/emails.json -> data/chains.json
        eid annotate inbox.json -o chains.json -w 8
    """
    from pathlib import Path

    from email_identity.annotate import AnnotationError, CoreNLPServerAnnotator, run_annotator
    from email_identity.io import load_emails, save_chains

    config = ctx.obj["config"]
    emails_path = Path(emails) if emails else config.emails_path
    output_path = Path(output) if output else config.chains_path

    if not emails_path.exists():
        console.print(f"[red]Error: Emails file not found at {emails_path}[/red]")
        ctx.exit(1)

    annotator = CoreNLPServerAnnotator.from_config(config)
    if not annotator.ping():
        console.print(f"[red]Error: CoreNLP server not reachable at {config.corenlp_url}[/red]")
        ctx.exit(1)

    try:
        batch = load_emails(emails_path)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        ctx.exit(1)

    workers = num_workers or config.annotate_workers
    console.print(f"[cyan]Annotating {len(batch)} emails with {workers} workers[/cyan]")

    try:
        all_chains = run_annotator(batch, annotator, num_workers=workers)
    except AnnotationError as e:
        console.print(f"[red]{e}[/red]")
        for message_id, error in list(e.failed.items())[:20]:
            console.print(f"  - {message_id}: {error}")
        ctx.exit(1)

    chains = {email.message_id: dict(c or {}) for email, c in zip(batch, all_chains)}
    save_chains(chains, output_path)
    console.print(f"[green]Saved chains for {len(chains)} emails to {output_path}[/green]")


@main.command()
@click.argument("emails", type=click.Path(), required=False)
@click.option(
    "--chains",
    type=click.Path(),
    default=None,
    help="Precomputed chains JSON (default: data/chains.json)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default=None,
    help="Where to write the clusters JSON (default: data/clusters.json)",
)
@click.pass_context
def resolve(ctx: click.Context, emails: str | None, chains: str | None, output: str | None) -> None:
    """Cluster senders and mentions into person identities.

    If the chains file does not exist, every email is treated as having
    no mentions and only sender clusters are produced.
    """
    from pathlib import Path

    from email_identity.annotate import PrecomputedAnnotator, annotate_batch
    from email_identity.identity import resolve_identities
    from email_identity.io import load_chains, load_emails
    from email_identity.output.cluster_report import cluster_summary, write_clusters

    config = ctx.obj["config"]
    emails_path = Path(emails) if emails else config.emails_path
    chains_path = Path(chains) if chains else config.chains_path
    output_path = Path(output) if output else config.clusters_path

    if not emails_path.exists():
        console.print(f"[red]Error: Emails file not found at {emails_path}[/red]")
        ctx.exit(1)

    try:
        batch = load_emails(emails_path)
        if chains_path.exists():
            chains_by_message = load_chains(chains_path)
        else:
            console.print(f"[yellow]No chains at {chains_path}; resolving senders only[/yellow]")
            chains_by_message = {}
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        ctx.exit(1)

    with_mentions = annotate_batch(batch, PrecomputedAnnotator(chains_by_message))
    clusters = resolve_identities(with_mentions)
    write_clusters(clusters, output_path)

    table = Table(title="Person clusters")
    table.add_column("ID", style="cyan")
    table.add_column("Canonical name")
    table.add_column("Addresses")
    table.add_column("Names")
    table.add_column("Mentions", justify="right")
    for cluster in clusters:
        table.add_row(
            cluster.cluster_id,
            cluster.canonical_name or "",
            ", ".join(sorted(cluster.email_addresses)),
            ", ".join(sorted(cluster.names)),
            str(len(cluster.mentions)),
        )
    console.print(table)

    stats = cluster_summary(clusters)
    console.print("\n[green]Resolution complete:[/green]")
    console.print(f"  Clusters:     {stats['clusters']}")
    console.print(f"  With address: {stats['with_address']}")
    console.print(f"  Name-only:    {stats['name_only']}")
    console.print(f"  Mentions:     {stats['mentions']}")
    console.print(f"  Written to:   {output_path}")


if __name__ == "__main__":
    main()
