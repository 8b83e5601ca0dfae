from efield_sim import Sandbox
from efield_sim.commands import AddCharge, SelectCharge, ToggleGaussSurface, QueryPoint
from efield_sim.logging_config import setup_logging
from efield_sim.renderer import DebugRenderer

setup_logging()

sandbox = Sandbox()
a = sandbox.dispatch(AddCharge((300, 300), "2"))
b = sandbox.dispatch(AddCharge((500, 300), "-2"))
sandbox.dispatch(SelectCharge(a.id))
sandbox.dispatch(SelectCharge(b.id))
sandbox.dispatch(ToggleGaussSurface())

DebugRenderer(verbose=True).render_frame(sandbox.recompute())

sample = sandbox.dispatch(QueryPoint((400, 300)))
print("E at midpoint", sample.vector, "|E|", sample.magnitude)
