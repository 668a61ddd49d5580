import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from infra.errors import (
    DocumentCancelled,
    NoCredentialAvailable,
    PersistenceFailed,
    RenderingFailed,
    SecretDecryptionError,
)
from infra.pipeline.rich_progress import RichProgressBar
from cli.helpers import create_pipeline, load_config, open_key_store, parse_provider


def setup_convert_parser(subparsers):
    convert_parser = subparsers.add_parser('convert', help='Convert a PDF to Markdown')
    convert_parser.add_argument('pdf', help='Path to the PDF file')
    convert_parser.add_argument('--provider', help='Key provider to use (default: from config)')
    convert_parser.add_argument('--dpi', type=int, help='Page rendering resolution (default: from config)')
    convert_parser.add_argument('--name', help='Document name (default: PDF file name)')
    convert_parser.add_argument('-o', '--output', help='Also write the Markdown to this file')
    convert_parser.set_defaults(func=cmd_convert)


def cmd_convert(args):
    pdf_path = Path(args.pdf).expanduser()
    if not pdf_path.exists():
        print(f"❌ PDF not found: {pdf_path}")
        sys.exit(1)

    library_config = load_config()
    provider = parse_provider(args.provider or library_config.defaults.provider)
    if library_config.get_provider(provider.value) is None:
        print(f"❌ No endpoint configured for provider '{provider.value}' (see 'smartmd config show')")
        sys.exit(1)

    store = open_key_store()
    pipeline = create_pipeline(store, library_config, dpi=args.dpi)

    bar = RichProgressBar(prefix=f"{pdf_path.name} ")

    def on_snapshot(snapshot):
        bar.update(snapshot.pages_done, total=snapshot.page_count, suffix=snapshot.message)

    cancel_event = threading.Event()

    with ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(
            pipeline.run,
            pdf_path,
            provider,
            name=args.name,
            on_snapshot=on_snapshot,
            cancel_event=cancel_event,
        )
        try:
            document = _wait(future, cancel_event, bar)
        finally:
            bar.finish()

    failed = len(document.failed_pages)
    print(f"✅ Converted {document.name}: {document.page_count} pages"
          + (f" ({failed} with errors: {', '.join(map(str, document.failed_pages))})" if failed else ""))
    print(f"   Document ID: {document.id}")

    if args.output:
        _write_output(Path(args.output), document.content)


def _wait(future, cancel_event, bar):
    try:
        try:
            return future.result()
        except KeyboardInterrupt:
            cancel_event.set()
            bar.finish("⏹  Cancelling after the current page...")
            return future.result()
    except NoCredentialAvailable as e:
        print(f"❌ {e}")
        print("   Add keys with 'smartmd keys add <provider>' or check 'smartmd keys status'.")
        sys.exit(2)
    except RenderingFailed as e:
        print(f"❌ {e}")
        sys.exit(3)
    except PersistenceFailed as e:
        print(f"❌ {e}")
        fallback = Path(f"{e.document.id}.md")
        _write_output(fallback, e.document.content)
        print("   The converted content was written to the file above instead.")
        sys.exit(4)
    except DocumentCancelled as e:
        print(f"⏹  {e}. Nothing was saved.")
        sys.exit(130)
    except SecretDecryptionError as e:
        print(f"❌ {e}. Check SMARTMD_SECRET_KEY.")
        sys.exit(1)


def _write_output(path: Path, content: str):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content.lstrip("\n"), encoding="utf-8")
    print(f"   Wrote {path}")
