#!/usr/bin/env python3
"""
AWS Lambda Deployer

Updates the code and/or configuration of an existing Lambda function from a
CI pipeline (Drone, GitHub Actions, or any shell).

This script supports running directly from a source checkout. It adds the
local `src/` directory to sys.path before importing the CLI. For production
use, prefer installing the project and using the `lambda-deploy` console
script.

Examples:
  # Upload a pre-built zip
  python3 main.py --region us-east-1 --function-name my-fn --zip-file dist/app.zip

  # Zip sources and raise the memory limit
  python3 main.py --function-name my-fn --source "src/*.py" requirements.txt --memory-size 512

  # Validate only
  python3 main.py --function-name my-fn --s3-bucket builds --s3-key app.zip --dry-run
"""

import os
import sys

# Add src/ to path to import modules directly
REPO_ROOT = os.path.dirname(os.path.abspath(__file__))
SRC_PATH = os.path.join(REPO_ROOT, "src")
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from cli import main

if __name__ == "__main__":
    sys.exit(main())
