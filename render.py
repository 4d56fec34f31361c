import os
import sys
import warnings
from pathlib import Path

from julia import Viewport, generate, png_filename, save_png

_VERBOSE_FLAGS = {"--verbose", "-v"}
_TENSOR_FLAGS = {"--tensor"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

VERBOSE = _cli_verbose
ENGINE = "tensor" if any(arg in _TENSOR_FLAGS for arg in sys.argv[1:]) else "python"
ENGINES = ("python", "tensor")


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


def select_device():
    """Pick the first visible GPU for the TensorFlow engine, else the CPU."""

    if _suppress_messages:
        warnings.filterwarnings(
            "ignore",
            message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
            category=UserWarning,
            module="google.protobuf",
        )

    import tensorflow as tf

    if _suppress_messages:
        tf.get_logger().setLevel("ERROR")

    log("TensorFlow version: %s" % tf.__version__)

    gpus = tf.config.list_physical_devices('GPU')
    if not gpus:
        log("No GPU found, using CPU")
        return '/CPU:0'
    try:
        for gpu in gpus:
            tf.config.experimental.set_memory_growth(gpu, True)
    except RuntimeError as e:
        log(e)
        return '/CPU:0'
    log("GPU found, using %s" % gpus[0].name)
    return '/GPU:0'


def _print_progress(done, total):
    # Columns finished before the current one.
    print("\r{}%".format(100 * (done - 1) // total), end='', flush=True)


def render(viewport, width, height, filename, *, engine="python", device=None) -> Path:
    """Generate one frame and write it to ``filename`` as a PNG."""

    if engine not in ENGINES:
        raise ValueError(f"Unknown engine '{engine}'. Valid choices: {', '.join(ENGINES)}.")

    output_path = png_filename(filename)
    log("Rendering %dx%d over %s with the %s engine" % (width, height, viewport, engine))

    print("0%", end='', flush=True)
    if engine == "tensor":
        from julia.renderer import generate_tensor

        image = generate_tensor(viewport, width, height, device=device or select_device())
    else:
        image = generate(viewport, width, height, progress=_print_progress)

    print(f"\rSaving to '{output_path}'...", end='', flush=True)
    save_png(image, output_path)
    print(f"\rSaved to '{output_path}'.   ")
    return output_path


def main():
    render(Viewport.default(), 1 << 10, 1 << 10, "output", engine=ENGINE)


if __name__ == '__main__':
    main()
