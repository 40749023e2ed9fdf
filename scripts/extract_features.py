"""
Extract band features from recording CSV files.
"""
import logging
import logging.config
import click
import pandas as pd
from pathlib import Path
import sys

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from eeg_band_features.config import (
    BAND_NAMES, LOGGING_CONFIG, N_JOBS, SEGMENT_MODES, TRANSFORMS
)
from eeg_band_features.data import Recording
from eeg_band_features.features import BandFeatureExtractor

logging.config.dictConfig(LOGGING_CONFIG)
logger = logging.getLogger(__name__)


@click.command()
@click.option('--recording', '-r', 'recordings',
              type=(click.Path(exists=True, dir_okay=False, path_type=Path), str),
              multiple=True, required=True,
              help='CSV file (time column, then one column per channel) and its label')
@click.option('--segments', '-s', type=int, default=1,
              help='Number of epochs per recording (1 disables segmentation)')
@click.option('--sampling-frequency', '-f', type=float, required=True,
              help='Sampling rate in Hz')
@click.option('--duration', '-d', type=float, required=True,
              help='Nominal recording duration in seconds')
@click.option('--mode', '-m', type=click.Choice(SEGMENT_MODES), default='general',
              help='Band selection mode')
@click.option('--band1', type=click.Choice(BAND_NAMES),
              help='Band for the 1fBand, 2fBand and 1fBand5features modes')
@click.option('--band2', type=click.Choice(BAND_NAMES),
              help='Second band for the 2fBand mode')
@click.option('--transform', '-t', type=click.Choice(TRANSFORMS), default='directFFT',
              help='Spectral transform')
@click.option('--highpass/--no-highpass', default=False,
              help='Remove content below 2 Hz before feature extraction')
@click.option('--filter-per-epoch', is_flag=True,
              help='Filter each epoch instead of the whole recording')
@click.option('--n-jobs', type=int, default=N_JOBS,
              help='Parallel workers for feature computation')
@click.option('--output-file', '-o', type=click.Path(dir_okay=False, path_type=Path),
              required=True, help='CSV file to write the feature table to')
def main(recordings, segments, sampling_frequency, duration, mode, band1, band2,
         transform, highpass, filter_per_epoch, n_jobs, output_file):
    """Extract frequency-band features from labeled recordings."""
    loaded = []
    for csv_file, label in recordings:
        logger.info(f"Loading {csv_file} ({label})")
        frame = pd.read_csv(csv_file)
        loaded.append(Recording.from_frame(
            frame, sampling_frequency, recording_id=csv_file.stem, label=label
        ))

    extractor = BandFeatureExtractor(
        channel_count=loaded[0].n_channels,
        segment_count=segments,
        sampling_frequency=sampling_frequency,
        total_duration=duration,
        segment_mode=mode,
        band1=band1,
        band2=band2,
        transform=transform,
        highpass=highpass,
        filter_per_epoch=filter_per_epoch,
        n_jobs=n_jobs
    )
    table = extractor.extract(loaded)

    output_file.parent.mkdir(parents=True, exist_ok=True)
    table.to_frame().to_csv(output_file, index=False)

    logger.info(f"Saved {len(table)} rows x {table.features_per_sample} features to {output_file}")


if __name__ == "__main__":
    main()
