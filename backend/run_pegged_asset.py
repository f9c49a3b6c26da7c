import argparse
import logging
import sys

from peggedsupply.adapters.adapter_pegged_supply import AdapterPeggedSupply
from peggedsupply.adapters.pegged_assets.registry import available_assets
from peggedsupply.config import Settings
from peggedsupply.errors import PeggedSupplyError
from peggedsupply.misc.helper_functions import send_discord_message
from peggedsupply.misc.report_store import CsvReportStore
from peggedsupply.misc.sdk_cache import SdkCache

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger("pegged_supply")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Compute the circulating supply of a pegged asset across all chains')
    parser.add_argument('asset', type=str, help=f'Pegged asset adapter, one of: {", ".join(available_assets())}')
    parser.add_argument('peg_type', type=str, nargs='?', default=None, help='Peg type to track (default: PEG_TYPE, then the peg type of the asset)')
    parser.add_argument('--timeout', type=float, default=None, help='Advisory timeout per issuance in seconds (default: ISSUANCE_TIMEOUT or 60)')
    parser.add_argument('--save', action='store_true', help='Upsert the report into the csv report store (REPORT_DIR)')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    asset = args.asset.replace('-', '_')
    settings = Settings.from_env()
    cache = SdkCache(settings.sdk_cache_file, settings.sdk_cache_max_age).load()

    try:
        adapter = AdapterPeggedSupply({'settings': settings, 'cache': cache}, CsvReportStore(settings.report_dir))
        report = adapter.extract({'asset': asset, 'peg_type': args.peg_type, 'timeout': args.timeout})

        print("\n".join(report.summary_lines()))
        if args.save:
            adapter.load(report, asset=asset)
    except (PeggedSupplyError, ValueError, OSError) as e:
        print("\n------ ERROR ------")
        logger.error(f"{asset} failed: {type(e).__name__}: {e}")
        if settings.discord_webhook:
            send_discord_message(f"Pegged asset {asset} failed: {e}", settings.discord_webhook)
        return 1
    finally:
        cache.save()

    return 0


if __name__ == '__main__':
    sys.exit(main())
