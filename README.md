# raytracer

A compact ray tracer. It reads a scene description written in libconfig syntax
and renders it to a plain-text PPM (P3) image.

The supported shapes are spheres, planes and capped cylinders, plus two
built-in plugin shapes, a cone and a chair. Lighting is ambient plus
directional with Lambertian diffuse shading. The image is rendered in 32×32
tiles on several threads, and a progress bar on the terminal shows how far the
render has got.

## Installation

```
pip install .
```

The package depends only on the standard library.

## Usage

```
raytracer scenes/simple_scene.cfg
```

The command takes exactly one argument, the scene file. It writes the image
next to the scene file under the same name with a `.ppm` extension. The example
above produces `scenes/simple_scene.ppm`.

The command prints an error and exits with status 84 in three cases: the
number of arguments is wrong, the scene cannot be read or built, or the image
cannot be written. It exits with 0 on success.

## Scene files

A scene must have three top-level sections: `camera`, `primitives` and
`lights`.

```
camera:
{
    resolution = { width = 400; height = 300; };
    position = { x = 0.0; y = -100.0; z = 20.0; };
    rotation = { x = 0.0; y = 0.0; z = 0.0; };
    fieldOfView = 72.0;
};

primitives:
{
    spheres = (
        { x = 60.0; y = 5.0; z = 40.0; r = 25.0;
          color = { r = 255; g = 64; b = 64; }; },
        { x = -40.0; y = 20.0; z = -10.0; r = 35.0;
          color = { r = 64; g = 255; b = 64; }; ambient = 0.3; diffuse = 0.8; }
    );

    planes = (
        { axis = "Z"; position = -20.0;
          color = { r = 64; g = 64; b = 255; }; }
    );

    cylinders = (
        { x = 0.0; y = 0.0; z = 0.0; r = 10.0; h = 40.0; }
    );

    plugins = (
        { plugin = "build/plugins/plugin_cone.so";
          position = { x = 0.0; y = 50.0; z = 0.0; };
          height = 50.0; radius = 20.0; inverted = false;
          color = { r = 128; g = 0; b = 255; }; }
    );
};

lights:
{
    ambient = 0.4;
    directional = (
        { x = 60.0; y = 10.0; z = -60.0; intensity = 0.8; }
    );
};
```

Notes on the format:

- **Camera.** The camera looks along +Y, with +Z up. Resolution, position,
  rotation and field of view (in degrees) are all optional. The defaults are
  800×600, the origin, and 90°. The rotation is read and stored but does not
  change the view direction.
- **Shapes.** Spheres need `x`, `y`, `z` and `r`. Planes need `axis` and
  `position`; only the first character of `axis` is used, and it must be `X`,
  `Y` or `Z` in either case. Cylinders need `x`, `y`, `z`, `r` and `h`. A
  cylinder stands along +Y from its base point, and both ends are capped.
- **Materials.** A shape may have a `color` group with `r`, `g` and `b`, each
  clamped to 0–255. When `color` is present, optional `ambient` and `diffuse`
  coefficients are read as well and clamped to 0–1. A shape without `color` is
  white, with both coefficients at 0.5.
- **Plugin shapes.** Each entry in the `plugins` list under `primitives` names
  its shape with `plugin`. The shape is chosen by the file name's stem, with
  any `plugin_` prefix dropped. `plugin_cone.so`, `cone.so` or just `cone`
  select the cone, and the same forms with `chair` select the chair.
  - The cone accepts `position`, `height` (default 50), `radius` (default 20),
    `inverted` and `color`.
  - The chair is a fixed wooden chair built from six boxes, and it takes no
    settings.

  An entry without `plugin` may give a `type` (`sphere`, `plane` or
  `cylinder`). Without a `type`, the shape is guessed: `r` together with `h`
  makes a cylinder, `r` alone a sphere, and `axis` a plane.
- **Lights.** `ambient` is a single intensity, clamped to 0–1. `directional`
  must be a list `( ... )`. Each entry in it takes a direction (`x`, `y`, `z`),
  which is the way the light travels, and an optional `intensity` and `color`.
  A `point` entry is accepted but adds no light.
- **Syntax.** Groups `{ ... }`, lists `( ... )`, arrays `[ ... ]`, and `#`,
  `//` and `/* */` comments are all understood. Settings may be written with
  `=` or `:`.

## What it does not do

- There are no shadows, reflections or refractions. Every surface is shaded
  from its own material and the lights alone. `Scene.is_in_shadow` can test
  for occlusion, but the renderer does not use it.
- Point lights and camera rotation are read from the file but have no effect.
- Plugins are not loaded from files on disk. The `plugin` path only selects one
  of the two built-in shapes, and any other name is an error.

## Using the library

The command is a thin layer over modules that you can also use directly:

- `raytracer.scene_parser.parse_file(filename)` reads a scene file into a
  `raytracer.scene.Scene`. `parse_scene(config)` builds a scene from settings
  that have already been parsed. Both raise `SceneParseError` when the scene
  is invalid.
- `raytracer.libconfig.load(path)` and `loads(text)` parse libconfig text into
  dicts (groups), lists (lists) and tuples (arrays). Malformed input raises
  `ConfigParseError`.
- `raytracer.renderer.Raytracer(num_threads=None, stream=None)` renders a
  scene with `render(scene)` and returns a list of `raytracer.color.Color`
  pixels, row by row with the top row first.
  - `register_observer` and `remove_observer` add and drop objects derived
    from `raytracer.progress.Observer`, such as `ProgressObserver`.
  - `cancel()` stops a render in progress.
  - `progress` gives the fraction of the render that is done.
- `raytracer.ppm.format_ppm(pixels, width, height)` returns the P3 text of an
  image. `write_ppm(filename, pixels, width, height)` writes it to a file.
- `raytracer.factory.default_factory()` returns the shared
  `PrimitiveFactory`, with `sphere`, `plane` and `cylinder` registered. You can
  register further creators with `register(type_name, creator)`.
  `raytracer.light_factory` builds lights from settings.
- The following modules provide the geometry. You can use them to build scenes
  in code instead of reading them from a file:
  - `raytracer.primitives`: `Sphere`, `Plane`, `Cylinder` and `HitInfo`
  - `raytracer.plugins`: `Box`, `Chair` and `Cone`
  - `raytracer.lights`: `AmbientLight` and `DirectionalLight`
  - `raytracer.vector`, `raytracer.ray`, `raytracer.camera`,
    `raytracer.color` and `raytracer.material`

```python
from raytracer.color import Color
from raytracer.lights import AmbientLight, DirectionalLight
from raytracer.material import Material
from raytracer.ppm import write_ppm
from raytracer.primitives import Sphere
from raytracer.renderer import Raytracer
from raytracer.scene import Scene
from raytracer.vector import Vector3D

scene = Scene()
scene.camera.width, scene.camera.height = 160, 120
scene.camera.position = Vector3D(0, -100, 0)
scene.add_primitive(Sphere(Vector3D(0, 0, 0), 30, Material(Color(255, 64, 64))))
scene.add_light(AmbientLight(0.3))
scene.add_light(DirectionalLight(Vector3D(1, 1, -1), 0.9))

pixels = Raytracer().render(scene)
write_ppm("sphere.ppm", pixels, scene.camera.width, scene.camera.height)
```

## Running the tests

```
pip install ".[test]"
pytest
```