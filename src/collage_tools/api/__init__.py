"""
High-level API for building and flattening layered collages.

Key modules:

- :py:mod:`collage_tools.api.project`: Project class, the ordered layer stack
- :py:mod:`collage_tools.api.layers`: Layer class with baseline and display grids
- :py:mod:`collage_tools.api.pixel`: RGB and HSL pixel representations
- :py:mod:`collage_tools.api.protocols`: The shared pixel interface
- :py:mod:`collage_tools.api.pil_io`: PIL/Pillow image I/O utilities
- :py:mod:`collage_tools.api.numpy_io`: NumPy array I/O utilities

Example usage::

    from collage_tools import Project

    project = Project.open('collage.txt')

    for layer in project:
        print(f"{layer.name}: {layer.filter}")

    project.apply_filter('screen', project[-1].name)
    project.composite().save('collage.png')
"""
