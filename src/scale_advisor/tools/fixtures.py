"""Static mock data read by the cloud and security analyzers.

The data is module-level and never mutated: accessors hand out deep copies
so a caller that edits its copy cannot change what the next call renders.
"""

import copy
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class EC2Instance:
    """An EC2 instance as reported by the inventory."""

    instance_id: str
    instance_type: str
    state: str
    availability_zone: str
    private_ip_address: str
    launch_time: str
    tags: dict[str, str]
    security_groups: tuple[str, ...]
    vpc_id: str
    subnet_id: str
    public_ip_address: str | None = None


@dataclass(frozen=True)
class RDSInstance:
    """An RDS database instance as reported by the inventory."""

    db_instance_identifier: str
    db_instance_class: str
    engine: str
    engine_version: str
    status: str
    availability_zone: str
    endpoint_address: str
    endpoint_port: int
    allocated_storage: int
    storage_type: str
    multi_az: bool
    vpc_id: str
    subnet_group_name: str
    security_groups: tuple[str, ...]
    backup_retention_period: int
    tags: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class CloudResources:
    """Inventory of one AWS account in one region."""

    region: str
    account_id: str
    ec2_instances: tuple[EC2Instance, ...]
    rds_instances: tuple[RDSInstance, ...]


_CLOUD_RESOURCES = CloudResources(
    region="us-east-1",
    account_id="123456789012",
    ec2_instances=(
        EC2Instance(
            instance_id="i-0123456789abcdef0",
            instance_type="t3.medium",
            state="running",
            availability_zone="us-east-1a",
            public_ip_address="54.123.45.67",
            private_ip_address="10.0.1.100",
            launch_time="2024-08-20T10:30:00Z",
            tags={"Name": "web-server-prod", "Environment": "production", "Application": "frontend"},
            security_groups=("sg-web-prod", "sg-ssh-access"),
            vpc_id="vpc-12345678",
            subnet_id="subnet-12345678",
        ),
        EC2Instance(
            instance_id="i-0987654321fedcba0",
            instance_type="t3.large",
            state="running",
            availability_zone="us-east-1b",
            public_ip_address="54.123.45.68",
            private_ip_address="10.0.2.100",
            launch_time="2024-08-18T14:15:00Z",
            tags={"Name": "api-server-prod", "Environment": "production", "Application": "backend"},
            security_groups=("sg-api-prod", "sg-ssh-access"),
            vpc_id="vpc-12345678",
            subnet_id="subnet-87654321",
        ),
        EC2Instance(
            instance_id="i-0abcdef123456789",
            instance_type="t3.small",
            state="stopped",
            availability_zone="us-east-1a",
            private_ip_address="10.0.1.101",
            launch_time="2024-08-15T09:00:00Z",
            tags={"Name": "staging-server", "Environment": "staging", "Application": "testing"},
            security_groups=("sg-staging", "sg-ssh-access"),
            vpc_id="vpc-12345678",
            subnet_id="subnet-12345678",
        ),
    ),
    rds_instances=(
        RDSInstance(
            db_instance_identifier="prod-postgres-main",
            db_instance_class="db.t3.medium",
            engine="postgres",
            engine_version="15.4",
            status="available",
            availability_zone="us-east-1a",
            endpoint_address="prod-postgres-main.c123456789.us-east-1.rds.amazonaws.com",
            endpoint_port=5432,
            allocated_storage=100,
            storage_type="gp3",
            multi_az=True,
            vpc_id="vpc-12345678",
            subnet_group_name="prod-db-subnet-group",
            security_groups=("sg-database-prod",),
            backup_retention_period=7,
            tags={"Name": "prod-postgres-main", "Environment": "production", "Application": "database"},
        ),
    ),
)


# Keys follow the AWS API field names, since the data is shown to the model as JSON
_SECURITY_DATA: dict[str, Any] = {
    "iam": {
        "policies": [
            {
                "name": "WebAppInstanceProfile",
                "arn": "arn:aws:iam::123456789012:role/WebAppInstanceProfile",
                "type": "role",
                "attachedPolicies": ["AmazonS3FullAccess", "AmazonRDSFullAccess"],
                "inlinePolicies": [
                    {
                        "name": "CustomS3Access",
                        "document": {
                            "Version": "2012-10-17",
                            "Statement": [{"Effect": "Allow", "Action": "s3:*", "Resource": "*"}],
                        },
                    }
                ],
                "lastUsed": "2024-01-15T10:30:00Z",
                "riskLevel": "HIGH",
            },
            {
                "name": "DatabaseAccessRole",
                "arn": "arn:aws:iam::123456789012:role/DatabaseAccessRole",
                "type": "role",
                "attachedPolicies": ["AmazonRDSDataFullAccess"],
                "inlinePolicies": [],
                "lastUsed": "2024-01-20T14:45:00Z",
                "riskLevel": "MEDIUM",
            },
            {
                "name": "AdminUser",
                "arn": "arn:aws:iam::123456789012:user/AdminUser",
                "type": "user",
                "attachedPolicies": ["AdministratorAccess"],
                "accessKeys": [
                    {
                        "accessKeyId": "AKIA...",
                        "status": "Active",
                        "lastUsed": "2024-01-10T09:15:00Z",
                        "lastRotated": "2023-06-15T12:00:00Z",
                    }
                ],
                "riskLevel": "CRITICAL",
            },
        ],
        "findings": [
            {
                "type": "OVERPRIVILEGED_ROLE",
                "severity": "HIGH",
                "resource": "WebAppInstanceProfile",
                "description": "Role has overly broad S3 permissions with wildcard resources",
            },
            {
                "type": "STALE_ACCESS_KEY",
                "severity": "MEDIUM",
                "resource": "AdminUser",
                "description": "Access key not rotated in 7+ months",
            },
            {
                "type": "ADMIN_USER_ACTIVE",
                "severity": "CRITICAL",
                "resource": "AdminUser",
                "description": "User with AdministratorAccess policy actively used",
            },
        ],
    },
    "secrets": {
        "codebaseFindings": [
            {
                "file": "src/config/database.js",
                "line": 15,
                "type": "DATABASE_PASSWORD",
                "severity": "CRITICAL",
                "pattern": "password: 'mySecretPassword123'",
                "recommendation": "Use AWS Secrets Manager or environment variables",
            },
            {
                "file": "deploy/docker-compose.yml",
                "line": 23,
                "type": "API_KEY",
                "severity": "HIGH",
                "pattern": "STRIPE_SECRET_KEY=sk_live_...",
                "recommendation": "Move to encrypted environment variables",
            },
            {
                "file": "src/utils/aws-client.ts",
                "line": 8,
                "type": "AWS_CREDENTIALS",
                "severity": "CRITICAL",
                "pattern": "accessKeyId: 'AKIA...'",
                "recommendation": "Use IAM roles instead of hardcoded credentials",
            },
        ],
        "awsSecretsManager": {
            "secrets": [
                {
                    "name": "prod/database/credentials",
                    "arn": (
                        "arn:aws:secretsmanager:us-east-1:123456789012:"
                        "secret:prod/database/credentials-AbCdEf"
                    ),
                    "lastRotated": "2024-01-01T00:00:00Z",
                    "rotationEnabled": False,
                    "riskLevel": "MEDIUM",
                },
                {
                    "name": "prod/api/stripe-key",
                    "arn": (
                        "arn:aws:secretsmanager:us-east-1:123456789012:"
                        "secret:prod/api/stripe-key-GhIjKl"
                    ),
                    "lastRotated": "2023-12-15T00:00:00Z",
                    "rotationEnabled": True,
                    "riskLevel": "LOW",
                },
            ]
        },
    },
    "containers": {
        "ecr": {
            "repositories": [
                {
                    "name": "webapp-frontend",
                    "uri": "123456789012.dkr.ecr.us-east-1.amazonaws.com/webapp-frontend",
                    "imageCount": 15,
                    "vulnerabilityFindings": [
                        {
                            "severity": "CRITICAL",
                            "count": 2,
                            "description": "Critical vulnerabilities in base image",
                        },
                        {
                            "severity": "HIGH",
                            "count": 8,
                            "description": "High severity package vulnerabilities",
                        },
                    ],
                },
                {
                    "name": "webapp-backend",
                    "uri": "123456789012.dkr.ecr.us-east-1.amazonaws.com/webapp-backend",
                    "imageCount": 12,
                    "vulnerabilityFindings": [
                        {
                            "severity": "MEDIUM",
                            "count": 5,
                            "description": "Medium severity vulnerabilities",
                        }
                    ],
                },
            ]
        },
        "ecs": {
            "services": [
                {
                    "name": "webapp-frontend-service",
                    "taskDefinition": "webapp-frontend:15",
                    "securityIssues": [
                        {
                            "type": "PRIVILEGED_CONTAINER",
                            "severity": "HIGH",
                            "description": "Container running with privileged access",
                        },
                        {
                            "type": "ROOT_USER",
                            "severity": "MEDIUM",
                            "description": "Container running as root user",
                        },
                    ],
                }
            ]
        },
        "dockerfiles": [
            {
                "path": "Dockerfile",
                "issues": [
                    {
                        "line": 1,
                        "type": "OUTDATED_BASE_IMAGE",
                        "severity": "HIGH",
                        "description": "Using outdated Node.js base image (node:14)",
                        "recommendation": "Update to node:18-alpine or later",
                    },
                    {
                        "line": 15,
                        "type": "RUNNING_AS_ROOT",
                        "severity": "MEDIUM",
                        "description": "No USER directive found, container runs as root",
                        "recommendation": "Add USER directive to run as non-root user",
                    },
                ],
            }
        ],
    },
    "compliance": {
        "frameworks": ["SOC2", "PCI-DSS", "GDPR"],
        "findings": [
            {
                "framework": "SOC2",
                "control": "CC6.1",
                "status": "NON_COMPLIANT",
                "severity": "HIGH",
                "description": "Logical access controls not properly implemented",
            },
            {
                "framework": "PCI-DSS",
                "control": "3.4",
                "status": "NON_COMPLIANT",
                "severity": "CRITICAL",
                "description": "Primary account number (PAN) not properly protected",
            },
        ],
    },
}


def get_cloud_resources() -> CloudResources:
    """Return a copy of the mock AWS inventory."""
    return copy.deepcopy(_CLOUD_RESOURCES)


def get_security_data() -> dict[str, Any]:
    """Return a copy of the mock security findings, grouped by category."""
    return copy.deepcopy(_SECURITY_DATA)
