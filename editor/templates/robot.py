#!/usr/bin/env python3

"""
Robot entry point copied next to generated.py.

    python3 robot.py deploy
    python3 robot.py sim

The editor writes the robot's event handlers to generated.py as plain
functions taking the robot instance; this class forwards to them.
"""

import wpilib

import generated


def _call(name, robot):
    handler = getattr(generated, name, None)
    if handler is not None:
        handler(robot)


class MyRobot(wpilib.TimedRobot):

    def robotInit(self):
        _call("robotInit", self)

    def robotPeriodic(self):
        _call("robotPeriodic", self)


if __name__ == "__main__":
    wpilib.run(MyRobot)
