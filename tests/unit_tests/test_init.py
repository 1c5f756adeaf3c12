"""
Unit tests for the package exports.
"""

import importlib.util
import os
import unittest

import config
import deployer
import errors

SRC_INIT = os.path.join(
    os.path.dirname(__file__), os.pardir, os.pardir, "src", "__init__.py"
)


class TestPackageExports(unittest.TestCase):
    """Test the public names re-exported by src/__init__.py."""

    def setUp(self):
        spec = importlib.util.spec_from_file_location("lambda_deploy_exports", SRC_INIT)
        self.package = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(self.package)

    def test_all_names_resolve(self):
        for name in self.package.__all__:
            self.assertTrue(hasattr(self.package, name), name)

    def test_exports_are_module_objects(self):
        self.assertIs(self.package.DeployConfig, config.DeployConfig)
        self.assertIs(self.package.FunctionDeployer, deployer.FunctionDeployer)
        self.assertIs(self.package.RemoteAPIError, errors.RemoteAPIError)
        self.assertTrue(issubclass(self.package.ValidationError, self.package.DeployError))


if __name__ == "__main__":
    unittest.main()
