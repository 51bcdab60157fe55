from rocketevo.physics.rocket import Rocket, RocketParameters, Vec3

__all__ = ["Rocket", "RocketParameters", "Vec3"]
