from efield_sim import Sandbox
from efield_sim.commands import AddCharge, MoveCharge
from efield_sim.renderer import BufferedRenderer

# A positive charge dragged past a fixed negative one; every drag frame is a full recompute
sandbox = Sandbox()
sandbox.dispatch(AddCharge((400, 300), -1.0))
q = sandbox.dispatch(AddCharge((100, 150), 1.0))

renderer = BufferedRenderer()
for x in range(100, 701, 50):
    sandbox.dispatch(MoveCharge(q.id, (x, 150)))
    renderer.render_frame(sandbox.recompute())

for i, frame in enumerate(renderer.frames):
    print(f"frame {i:2d}: {len(frame['lines']):3d} lines, {len(frame['arrowheads']):3d} arrowheads")
