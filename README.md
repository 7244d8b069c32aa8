# despeck

Building blocks for non-local despeckling of synthetic aperture radar (SAR)
and interferometric SAR images: tiling, image containers, covariance
similarity measures, NL-SAR training statistics and tile sizing.

## Contents

- `despeck.tile`: `Slice` is a non-empty half-open interval. It raises
  `ValueError` when `start >= stop`, and `Slice.get_sub` shrinks it.
  `TileIterator` and `TileIterator.square` yield `(rows, cols)` pairs of
  slices that cover an image row by row, with border and tile overlap.
- `despeck.sub_images`: `get_sub_image` cuts a block out of a
  `(channels, height, width)` array. `write_sub_image` writes one back in
  place and can leave out an overlap border. Out-of-range coordinates are
  clamped to the edge.
- `despeck.data`: `InsarData` holds master and slave amplitude, phase and
  three filtered planes. `AmplData` holds amplitude and reflectivity.
  `CovmatData` holds raw and filtered `dim x dim` complex covariance
  matrices. `CovmatData.from_insar` builds the 2x2 covariance from
  amplitudes and phase. `tileget` and `tilecpy` read and write single tiles.
- `despeck.sim_measures`: `abs2`, `det_covmat_2x2` and `det_covmat_3x3`, and
  `pixel_similarity_2x2` and `pixel_similarity_3x3` for Hermitian covariance
  matrices. These take scalars or numpy arrays. A NaN result becomes zero.
- `despeck.patches`: `get_all_patches` cuts covariance data into square
  patches. `dissimilarity`, `dissimilarity_2x2` and `dissimilarity_3x3`
  compare them. `all_dissim_combs` returns the dissimilarity of every pair.
- `despeck.nlsar_stats`: `Stats` builds a quantile lookup table and an
  inverse chi-square (49 degrees of freedom) table from dissimilarities.
  `Stats.max_quantilles_error` reports the largest step in the quantile
  table. `Params` is the `(patch_size, scale_size)` key.
  `store_stats_collection` and `load_stats_collection` write and read a
  `{Params: Stats}` mapping as JSON.
- `despeck.optimal_tiling`: `value_range`, `all_pairs`, `NmTiles`,
  `tiled_img_npixels`, `retain_small_offcut_tiles`, `sort_by_offcut`,
  `biggest_tile` and `scale_factor`.
- `despeck.tile_size`: `BufferSizes` gives the bytes of each NL-SAR buffer
  for one tile. `tile_size` picks a tile `(height, width)` from a global
  memory size and a maximum allocation size.
- Utilities:
  - `despeck.timings`: `join`, `total_time`, `format_timings` and
    `log_timings`.
  - `despeck.routine_env.RoutineEnv`: an abstract base whose `timed_run`
    adds up the run time of `run`.
  - `despeck.log_setup.logging_setup`: sends the named levels of the
    `despeck` logger to stdout. The levels are `debug`, `info`, `verbose`,
    `warning`, `fatal` and `error`.
  - `despeck.checks`: `odd` and `even`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
import numpy as np

from despeck.data import CovmatData, InsarData
from despeck.nlsar_stats import Params, Stats, store_stats_collection
from despeck.patches import all_dissim_combs, get_all_patches

rng = np.random.default_rng(0)
shape = (32, 32)
zeros = np.zeros(shape, dtype=np.float32)
insar = InsarData.from_arrays(
    rng.rayleigh(size=shape).astype(np.float32),
    rng.rayleigh(size=shape).astype(np.float32),
    rng.uniform(-np.pi, np.pi, size=shape).astype(np.float32),
    zeros, zeros, zeros,
)
covmat = CovmatData.from_insar(insar)

patches = get_all_patches(covmat, 4)
stats = Stats(all_dissim_combs(patches), 256)
print(stats.dissims_min, stats.dissims_max, stats.max_quantilles_error())

store_stats_collection({Params(4, 1): stats}, "stats.json")
```

## What it does not do

The package provides the pieces around a despeckling filter, not the filters
themselves:

- There is no boxcar, NL-SAR, NL-InSAR or Goldstein filter.
- Nothing runs on a GPU or other compute device. `tile_size` only takes the
  device memory figures you pass in.
- There is no command-line tool.
- Training statistics come from the dissimilarities you supply. The package
  does not apply the spatial averaging step before training.