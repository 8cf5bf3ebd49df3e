# fractalnet

Distributed fractal computation over TCP. A server hands out fragment tasks
to workers; a worker computes the pixel intensities of its fragment and sends
them back; the server colours the pixels and shows them in a window.

Fractals that can be computed: Julia (`JuliaDescriptor`), `Mandelbrot`,
`IteratedSinZ` (z ↦ c·sin z) and `NewtonRaphsonZ3` (Newton's method for
z³ − 1). `NewtonRaphsonZ4` can be sent and received in messages, but a worker
refuses to compute it (`fractalnet.engine.run` raises `ValueError`).

## Installation

```
pip install .
```

The server window uses pygame, which is installed as a dependency. To run the
tests:

```
pip install ".[test]"
pytest
```

## Commands

Start the server. It listens for workers and opens a window titled "Fractal":

```
fractalnet-server
```

Then start one or more workers:

```
fractalnet-worker
```

Both commands accept `--config PATH`, which may be repeated; the first file
that can be read is used. Without it, each looks at its own default paths
(`DEFAULT_PATHS` in `fractalnet.server_config` and
`fractalnet.worker_config`), which include `./config.toml`.

The worker prints a banner, asks the server for work, computes each task it
receives and returns the result, getting its next task in reply. If sending a
result fails it asks for work again; if that fails too, it stops with exit
status 0. If the very first request fails, it exits with status 1.

The server handles one connection at a time. A work request is answered with a
task and a random 16-byte task id as binary data. A result's binary data after
those first 16 bytes is decoded into `PixelIntensity` values, which the window
draws on its next frame. The server exits with status 1 if it cannot bind its
address, and with 0 when the window is closed.

## Configuration

Both programs read TOML. Missing tables or fields fall back to the defaults
below; text that is not valid TOML, or a field of the wrong type, makes the
whole configuration fall back to the defaults.

Server (`ServerConfig`, read by `load_server_config` / `parse_server_config`):

```toml
[server]
server_address = "localhost"   # default
port = "8787"                  # default, a string

[display]
width = 400                    # default, 0..65535
height = 400                   # default, 0..65535
```

Worker (`WorkerConfig`, read by `load_worker_config` / `parse_worker_config`):

```toml
[server]
server_address = "localhost"   # default
port = "8787"                  # default, a string

[worker]
worker_name = "Group 7"        # default
max_work = 100                 # default, 0..4294967295
```

## Wire format

Each message is a big-endian `u32` total length (JSON plus binary data), a
big-endian `u32` JSON length, the UTF-8 JSON text of the fragment, and then
the binary data. The JSON is externally tagged with the fragment's kind, for
example:

```json
{"FragmentRequest":{"worker_name":"test_worker","maximal_work_load":100}}
```

Fractals inside a `FragmentTask` are tagged the same way (`"Julia"`,
`"Mandelbrot"`, `"IteratedSinZ"`, `"NewtonRaphsonZ3"`, `"NewtonRaphsonZ4"`).
A worker sends back the data it received followed by, for every pixel row by
row, two big-endian `f32` values: `zn` and `count`.

`fractalnet.network.Network` provides `send_message`, `read_message` and
`close_connection`; errors in framing or decoding raise `NetworkError`, a
subclass of `OSError`.

## Library use

```python
from fractalnet.complex import Complex
from fractalnet.fractals import JuliaDescriptor

julia = JuliaDescriptor(c=Complex(0.285, 0.013), divergence_threshold_square=4.0)
zn, count = julia.determine_pixel_intensity(0.0, 0.0, 150)
# zn is the final squared modulus, count the iterations divided by 150
```

- `fractalnet.protocols.to_json` and `from_json` convert fragments to and from
  their JSON form; `from_json` raises `DecodeError` on bad input.
- `fractalnet.engine.run(task)` returns a `FragmentResult` and the pixel bytes.
- `fractalnet.colors.color_palette(t)` maps an intensity to an RGB triple.
- `fractalnet.server.decode_pixel_intensities(data)` decodes pixel bytes.
- `fractalnet.client.Client` and `fractalnet.server.Server` speak the protocol.

## What it does not do

- The server always hands out the same task: a 400×400 Julia set for
  c = 0.285 + 0.013i, 64 iterations, over x in [−1.2, 1.2] and y in [−1, 1.2].
  It does not split an image into fragments or track which ones are done.
- The window does not assemble results into one picture: each batch of pixels
  received is drawn from the top-left corner, repeated to fill the window.
- Nothing is saved to disk; results are only shown.