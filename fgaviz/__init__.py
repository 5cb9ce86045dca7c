"""fgaviz — interactive graph view of authorization-model DSL text.

Stages, in data-flow order:

  dsl          extract type / relation / condition nodes from model text
  layout       grid placement, node geometry, canvas extent
  render       edge computation and raster drawing
  interaction  hit-testing and single-node drag
  viewer       the operations a hosting UI calls
"""
