# infra_cdk/user_notifier_stack.py
from pathlib import Path

from aws_cdk import (
    Stack,
    Duration,
    CfnParameter,
    aws_events as events,
    aws_events_targets as targets,
    aws_iam as iam,
    aws_lambda as _lambda,
    aws_secretsmanager as secretsmanager,
    aws_ssm as ssm,
    CfnOutput
)
from constructs import Construct

NOTIFIER_CODE_DIR = str(Path(__file__).resolve().parents[1] / "lambdas" / "user_creation_notifier")
EMAIL_PARAMETER_PREFIX = "/iam/users"

EC2_USER_NAME = "my-ec2-user"
S3_USER_NAME = "my-s3-user"


class UserNotifierStack(Stack):
    '''
    CDK stack for the IAM user onboarding setup.
    Creates two read-only IAM groups and one user in each, sharing a generated temporary
    password from Secrets Manager. The users' e-mails are stored in SSM Parameter Store,
    and an EventBridge rule invokes the notifier Lambda for every CloudTrail CreateUser call.
    '''

    def __init__(self, scope: Construct, construct_id: str, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # === Parameters for Deployment ===
        ec2_user_email_param = CfnParameter(self, "EC2UserEmail", type="String",
            description=f"Email address for {EC2_USER_NAME}")

        s3_user_email_param = CfnParameter(self, "S3UserEmail", type="String",
            description=f"Email address for {S3_USER_NAME}")

        # === Temporary password shared by the new users ===
        temporary_password = secretsmanager.Secret(self, "TemporaryPassword",
            secret_name="TempUserPassword",
            description="Temporary password for all IAM users",
            generate_secret_string=secretsmanager.SecretStringGenerator(
                password_length=12,
                exclude_characters='"@/\\',
            )
        )

        # === Groups ===
        s3_user_group = iam.Group(self, "S3UserGroup", group_name="MyS3UserGroup")
        s3_user_group.attach_inline_policy(iam.Policy(self, "S3ReadOnlyPolicy",
            policy_name="S3ReadOnlyPolicy",
            statements=[iam.PolicyStatement(actions=["s3:ListBucket", "s3:GetObject"], resources=["*"])]
        ))

        ec2_user_group = iam.Group(self, "EC2UserGroup", group_name="MyEC2UserGroup")
        ec2_user_group.attach_inline_policy(iam.Policy(self, "EC2ReadOnlyPolicy",
            policy_name="EC2ReadOnlyPolicy",
            statements=[iam.PolicyStatement(actions=["ec2:DescribeInstances"], resources=["*"])]
        ))

        # === Users ===
        iam.User(self, "EC2User",
            user_name=EC2_USER_NAME,
            groups=[ec2_user_group],
            password=temporary_password.secret_value,
            password_reset_required=True,
        )

        iam.User(self, "S3User",
            user_name=S3_USER_NAME,
            groups=[s3_user_group],
            password=temporary_password.secret_value,
            password_reset_required=True,
        )

        # === User e-mails, stored where the notifier looks them up ===
        ssm.StringParameter(self, "EC2UserEmailParameter",
            parameter_name=f"{EMAIL_PARAMETER_PREFIX}/{EC2_USER_NAME}/email",
            string_value=ec2_user_email_param.value_as_string,
        )

        ssm.StringParameter(self, "S3UserEmailParameter",
            parameter_name=f"{EMAIL_PARAMETER_PREFIX}/{S3_USER_NAME}/email",
            string_value=s3_user_email_param.value_as_string,
        )

        # === Notifier Lambda ===
        notifier_function = _lambda.Function(self, "IAMUserLoggingLambda",
            function_name="NewIAMUserLogger",
            runtime=_lambda.Runtime.PYTHON_3_12,
            code=_lambda.Code.from_asset(NOTIFIER_CODE_DIR),
            handler="app.handler",
            timeout=Duration.seconds(15),
            environment={
                "EMAIL_PARAMETER_PREFIX": EMAIL_PARAMETER_PREFIX,
                "LOG_LEVEL": "INFO",
            },
        )
        notifier_function.add_to_role_policy(iam.PolicyStatement(actions=["ssm:GetParameter"], resources=[
            f"arn:aws:ssm:{self.region}:{self.account}:parameter{EMAIL_PARAMETER_PREFIX}/*"
        ]))

        # === EventBridge rule for IAM user creation ===
        # The LambdaFunction target also grants events.amazonaws.com permission to invoke.
        self.user_creation_rule = events.Rule(self, "UserCreationEventRule",
            rule_name="IAMUserCreationRule",
            description="Triggers a Lambda function when a new IAM user is created",
            event_pattern=events.EventPattern(
                source=["aws.iam"],
                detail_type=["AWS API Call via CloudTrail"],
                detail={
                    "eventSource": ["iam.amazonaws.com"],
                    "eventName": ["CreateUser"],
                },
            ),
            targets=[targets.LambdaFunction(notifier_function)],
        )

        self.notifier_function = notifier_function

        # === Outputs ===
        CfnOutput(self, "IAMUserLoggingLambdaARN",
            value=notifier_function.function_arn,
            description="ARN of the Lambda function that logs new IAM users"
        )
