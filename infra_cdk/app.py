#!/usr/bin/env python3
# infra_cdk/app.py
import os

import aws_cdk as cdk
from cdk_nag import AwsSolutionsChecks

from infra_cdk.user_notifier_stack import UserNotifierStack

app = cdk.App()

env = cdk.Environment(
    account=os.environ.get('CDK_DEFAULT_ACCOUNT'),
    region=os.environ.get('CDK_DEFAULT_REGION', 'us-east-1'),
)

UserNotifierStack(app, "UserNotifierStack", env=env,
    description="IAM users, groups and a Lambda notifier for IAM user creation events")

# Add AWS Solutions checks for best practices
cdk.Aspects.of(app).add(AwsSolutionsChecks())

app.synth()
